"""Font registry backed by fontconfig (Linux/macOS).

Family members and faces are looked up with ``fontconfig.query`` so that only
installed fonts are returned; the system font uses ``fontconfig.match``, which
always yields the best available substitute for the generic family.
"""

import logging
from typing import Any

try:
    import fontconfig

    HAS_FONTCONFIG = True
except ImportError:
    HAS_FONTCONFIG = False

from fontmatch.core.registry import FontFace, FontRegistry, traits_from_style
from fontmatch.core.weights import from_fontconfig_weight, to_fontconfig_weight

logger = logging.getLogger(__name__)

SELECT = ("postscriptname", "family", "style", "weight", "slant", "width", "file")

# fontconfig slant values
SLANT_ITALIC = 100
SLANT_OBLIQUE = 110

SYSTEM_FAMILY_ALIAS = "sans-serif"


def _first(value: Any) -> Any:
    """fontconfig returns multi-valued properties as lists."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _escape(value: str) -> str:
    for char in ("\\", ":", ","):
        value = value.replace(char, "\\" + char)
    return value


class FontconfigRegistry(FontRegistry):
    """Font registry using fontconfig.

    Example:
        >>> registry = FontconfigRegistry()
        >>> registry.list_family_members("DejaVu Sans")
        ['DejaVuSans-ExtraLight', 'DejaVuSans', ..., 'DejaVuSans-BoldOblique']
    """

    def __init__(self, system_family: str = SYSTEM_FAMILY_ALIAS) -> None:
        self.system_family = system_family

    @staticmethod
    def _to_face(result: dict[str, Any], family: str | None = None) -> FontFace | None:
        """Convert a fontconfig result to a FontFace.

        Args:
            result: fontconfig result with the properties in ``SELECT``.
            family: Preferred family name when the font lists several.
        """
        postscript_name = _first(result.get("postscriptname"))
        if not postscript_name:
            return None

        families = result.get("family") or []
        if not isinstance(families, (list, tuple)):
            families = [families]
        family_name = next(
            (name for name in families if family and name.lower() == family.lower()),
            _first(families) or "",
        )

        slant = _first(result.get("slant")) or 0
        width = _first(result.get("width"))
        fc_weight = _first(result.get("weight"))
        weight = from_fontconfig_weight(fc_weight) if fc_weight is not None else 0.0
        return FontFace(
            postscript_name=postscript_name,
            family=family_name,
            weight=weight,
            symbolic_traits=traits_from_style(
                slant in (SLANT_ITALIC, SLANT_OBLIQUE),
                float(width) if width is not None else None,
                weight,
            ),
            style=_first(result.get("style")) or "",
            file=_first(result.get("file")) or "",
        )

    def _query(self, where: str) -> list[dict[str, Any]]:
        try:
            return fontconfig.query(where=where, select=SELECT) or []  # type: ignore
        except Exception as e:
            logger.debug(f"fontconfig query '{where}' failed: {e}")
            return []

    def family_faces(self, family: str) -> list[FontFace]:
        if not family.strip():
            return []
        faces: dict[str, FontFace] = {}
        for result in self._query(f":family={_escape(family)}"):
            face = self._to_face(result, family)
            if face and face.postscript_name not in faces:
                faces[face.postscript_name] = face
        logger.debug(f"fontconfig lists {len(faces)} faces for '{family}'")
        return list(faces.values())

    def find_face(self, name: str) -> FontFace | None:
        if not name.strip():
            return None
        for result in self._query(f":postscriptname={_escape(name)}"):
            face = self._to_face(result)
            if face and face.postscript_name == name:
                return face
        return None

    def system_face(self, weight: float | None = None) -> FontFace | None:
        pattern = f":family={_escape(self.system_family)}"
        if weight is not None:
            pattern += f":weight={to_fontconfig_weight(weight):g}"
        try:
            match = fontconfig.match(pattern=pattern, select=SELECT)
        except Exception as e:
            logger.debug(f"fontconfig match '{pattern}' failed: {e}")
            return None
        if not match:
            return None
        return self._to_face(match)  # type: ignore
