"""Font registry interface and shared registry behaviour.

A registry answers the questions the resolver asks the platform: which faces
belong to a family, which concrete font a face name refers to, and what the
system font is. :class:`FontRegistry` implements those questions over an index
of :class:`FontFace` records; concrete subclasses only need to populate it.
"""

import abc
import dataclasses
import logging
from typing import Any, Protocol

try:
    from typing import Self  # type: ignore
except ImportError:
    from typing_extensions import Self

from fontmatch.core.constants import (
    BOLD_TRAIT,
    CONDENSED_TRAIT,
    DEFAULT_FONT_SIZE,
    EXPANDED_TRAIT,
    ITALIC_TRAIT,
    MATCH_TRAITS,
    WeightClass,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class FontFace:
    """One installed face, independent of size.

    Attributes:
        postscript_name: PostScript name of the face (e.g. ``Helvetica-Bold``).
        family: Family name.
        weight: Weight on the normalized axis, 0.0 when unknown.
        symbolic_traits: Bitmask of ``ITALIC_TRAIT``, ``CONDENSED_TRAIT``, ...
        style: Style name reported by the font (e.g. ``Bold Oblique``).
        file: Path to the font file, empty when not known.
    """

    postscript_name: str
    family: str
    weight: float = 0.0
    symbolic_traits: int = 0
    style: str = ""
    file: str = ""


@dataclasses.dataclass(eq=False)
class FontHandle:
    """A concrete font instance: a face at a size.

    Handles compare by identity; the resolver cache hands out the same object
    for repeated lookups.
    """

    postscript_name: str
    family: str
    size: float
    weight: float = 0.0
    symbolic_traits: int = 0
    style: str = ""
    file: str = ""

    @classmethod
    def from_face(cls, face: FontFace, size: float) -> Self:
        return cls(
            postscript_name=face.postscript_name,
            family=face.family,
            size=size,
            weight=face.weight,
            symbolic_traits=face.symbolic_traits,
            style=face.style,
            file=face.file,
        )

    @property
    def font_name(self) -> str:
        return self.postscript_name

    def to_dict(self) -> dict[str, Any]:
        """Convert the handle to a serializable dictionary."""
        return dataclasses.asdict(self)


class FamilyRegistry(Protocol):
    """What the resolver needs from the platform's font manager."""

    def list_family_members(self, family: str) -> list[str]:
        """Face names of ``family`` in platform order; empty if unknown."""
        ...

    def font_by_name(self, name: str, size: float) -> FontHandle | None:
        """Font for a face name, or None."""
        ...

    def system_font(
        self, size: float, weight: float | None = None
    ) -> FontHandle | None:
        """System font at ``size``, optionally at a weight anchor."""
        ...

    def default_family_name(self) -> str:
        """Family of the system font at the default size."""
        ...

    def font_with_traits(
        self, font: FontHandle, traits: int, size: float
    ) -> FontHandle | None:
        """Variant of ``font`` carrying the ``traits`` bits, or None."""
        ...


class FontRegistry(abc.ABC):
    """Registry over an index of :class:`FontFace` records.

    Subclasses implement :meth:`family_faces`, :meth:`find_face` and
    :meth:`system_face`; member ordering, handle creation and trait
    derivation are shared.
    """

    @abc.abstractmethod
    def family_faces(self, family: str) -> list[FontFace]:
        """All faces registered under ``family``."""

    @abc.abstractmethod
    def find_face(self, name: str) -> FontFace | None:
        """Face with the given PostScript name."""

    @abc.abstractmethod
    def system_face(self, weight: float | None = None) -> FontFace | None:
        """Face of the system font closest to ``weight``."""

    def list_family_members(self, family: str) -> list[str]:
        """Face names of ``family``, lightest first."""
        faces = sorted(self.family_faces(family), key=lambda face: face.weight)
        return [face.postscript_name for face in faces]

    def font_by_name(self, name: str, size: float) -> FontHandle | None:
        face = self.find_face(name)
        if face is None:
            return None
        return FontHandle.from_face(face, size)

    def system_font(
        self, size: float, weight: float | None = None
    ) -> FontHandle | None:
        face = self.system_face(weight)
        if face is None:
            logger.debug("No system font available")
            return None
        return FontHandle.from_face(face, size)

    def default_family_name(self) -> str:
        font = self.system_font(DEFAULT_FONT_SIZE)
        return font.family if font else ""

    def font_with_traits(
        self, font: FontHandle, traits: int, size: float
    ) -> FontHandle | None:
        """Find the member of ``font``'s family with the requested traits.

        Only the italic and condensed bits are compared, and they must match
        exactly. Among matching members the one with the closest weight is
        chosen.
        """
        wanted = traits & MATCH_TRAITS
        candidates = [
            face
            for face in self.family_faces(font.family)
            if face.symbolic_traits & MATCH_TRAITS == wanted
        ]
        if not candidates:
            logger.debug(
                f"No variant of '{font.postscript_name}' with traits {traits:#x}"
            )
            return None
        best = min(candidates, key=lambda face: abs(face.weight - font.weight))
        return FontHandle.from_face(best, size)


def traits_from_style(
    italic: bool, width: float | None = None, weight: float | None = None
) -> int:
    """Build a symbolic trait mask from an italic flag, width and weight.

    Widths follow the fontconfig/OS-2 percentage scale, where 100 is normal.
    Weights on the normalized axis from the bold class up set the bold bit.
    """
    traits = ITALIC_TRAIT if italic else 0
    if weight is not None and weight >= WeightClass.BOLD.range[0]:
        traits |= BOLD_TRAIT
    if width is not None:
        if width < 100:
            traits |= CONDENSED_TRAIT
        elif width > 100:
            traits |= EXPANDED_TRAIT
    return traits
