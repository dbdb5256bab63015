"""Font registry built by scanning font files with fontTools.

This registry works without fontconfig. Font files are collected from the
Windows registry (when available) and the usual font directories, then
parsed once to build an in-memory index by PostScript name and family.

Architecture:
    - Query HKLM and HKCU registry keys for font file paths (Windows)
    - Walk standard and configured font directories
    - Parse TTF/OTF files to extract names, weight and style bits
    - Build the index lazily on first lookup

Usage:
    >>> registry = FontFileRegistry(font_dirs=["/path/to/fonts"])
    >>> registry.list_family_members("Arial")
    ['ArialMT', 'Arial-ItalicMT', 'Arial-BoldMT', 'Arial-BoldItalicMT']
"""

import logging
import os
import sys
import threading
from collections.abc import Iterable

from fontTools.ttLib import TTFont

from fontmatch.core.constants import MATCH_TRAITS
from fontmatch.core.registry import FontFace, FontRegistry, traits_from_style
from fontmatch.core.weights import from_css_weight

logger = logging.getLogger(__name__)

# Platform-specific imports
HAS_WINREG = sys.platform == "win32"
if HAS_WINREG:
    import winreg  # type: ignore[import-not-found]

FONT_EXTENSIONS = (".ttf", ".otf")

# First installed family becomes the system font.
SYSTEM_FAMILY_CANDIDATES = (
    "Helvetica",
    "Helvetica Neue",
    "Segoe UI",
    "Arial",
    "DejaVu Sans",
    "Liberation Sans",
)

# OS/2 usWidthClass to width percentage.
WIDTH_CLASSES = {
    1: 50.0,
    2: 62.5,
    3: 75.0,
    4: 87.5,
    5: 100.0,
    6: 112.5,
    7: 125.0,
    8: 150.0,
    9: 200.0,
}

_REGISTRY_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\Fonts"


def default_font_dirs() -> list[str]:
    """Standard font directories for the current platform."""
    home = os.path.expanduser("~")
    if sys.platform == "darwin":
        return [
            "/System/Library/Fonts",
            "/Library/Fonts",
            os.path.join(home, "Library", "Fonts"),
        ]
    if sys.platform == "win32":
        return [
            os.path.join(os.environ.get("WINDIR", "C:\\Windows"), "Fonts"),
            os.path.join(
                os.environ.get("LOCALAPPDATA", ""), "Microsoft", "Windows", "Fonts"
            ),
        ]
    return [
        "/usr/share/fonts",
        "/usr/local/share/fonts",
        os.path.join(home, ".fonts"),
        os.path.join(home, ".local", "share", "fonts"),
    ]


class FontFileRegistry(FontRegistry):
    """Font registry over font files parsed with fontTools.

    Attributes:
        font_dirs: Directories scanned in addition to the registry entries.
        system_families: Families tried, in order, for the system font.
    """

    def __init__(
        self,
        font_dirs: Iterable[str] | None = None,
        system_families: Iterable[str] = SYSTEM_FAMILY_CANDIDATES,
        use_system_dirs: bool = True,
    ) -> None:
        self.font_dirs = list(font_dirs or [])
        if use_system_dirs:
            self.font_dirs.extend(default_font_dirs())
        self.system_families = tuple(system_families)
        self._use_winreg = use_system_dirs and HAS_WINREG
        self._faces: dict[str, FontFace] = {}
        self._families: dict[str, list[str]] = {}
        self._initialized = False
        self._lock = threading.Lock()

    def family_faces(self, family: str) -> list[FontFace]:
        self._ensure_index()
        names = self._families.get(family.strip().lower(), [])
        return [self._faces[name] for name in names]

    def find_face(self, name: str) -> FontFace | None:
        self._ensure_index()
        return self._faces.get(name)

    def system_face(self, weight: float | None = None) -> FontFace | None:
        """Plain face of the first installed system family, nearest ``weight``.

        Italic and condensed faces are never the system font.
        """
        target = 0.0 if weight is None else weight
        for family in self.system_families:
            faces = [
                face
                for face in self.family_faces(family)
                if not face.symbolic_traits & MATCH_TRAITS
            ]
            if faces:
                return min(faces, key=lambda face: abs(face.weight - target))
        return None

    def add_face(self, face: FontFace) -> None:
        """Register a face; a PostScript name already indexed is kept."""
        if face.postscript_name in self._faces:
            return
        self._faces[face.postscript_name] = face
        self._families.setdefault(face.family.lower(), []).append(
            face.postscript_name
        )

    def _ensure_index(self) -> None:
        with self._lock:
            if not self._initialized:
                self._build_index()

    def _build_index(self) -> None:
        """Build the face index by parsing every collected font file.

        Note:
            - Silently skips fonts that can't be parsed
            - Logs summary statistics at DEBUG level
            - Sets _initialized flag to prevent rebuilding
        """
        logger.debug("Building font file index...")

        font_files = []
        if self._use_winreg:
            font_files.extend(self._get_registry_fonts(winreg.HKEY_LOCAL_MACHINE))
            font_files.extend(self._get_registry_fonts(winreg.HKEY_CURRENT_USER))
        for directory in self.font_dirs:
            font_files.extend(self._scan_directory(directory))

        # Remove duplicates (preserve order)
        unique_files = list(dict.fromkeys(font_files))

        parsed = 0
        skipped = 0
        for font_path in unique_files:
            face = self._parse_font_file(font_path)
            if face:
                self.add_face(face)
                parsed += 1
            else:
                skipped += 1

        logger.debug(
            f"Font file index built: {parsed} fonts parsed, {skipped} skipped, "
            f"{len(self._families)} families"
        )
        self._initialized = True

    def _scan_directory(self, directory: str) -> list[str]:
        if not os.path.isdir(directory):
            return []
        found = []
        for root, _, files in os.walk(directory):
            for filename in sorted(files):
                if filename.lower().endswith(FONT_EXTENSIONS):
                    found.append(os.path.join(root, filename))
        return found

    def _get_registry_fonts(self, hive: object) -> list[str]:
        """Get font file paths from a Windows registry hive.

        Relative paths are resolved against the system font directory for
        HKLM and the per-user font directory for HKCU.
        """
        if hive == winreg.HKEY_LOCAL_MACHINE:
            base_dir = os.path.join(os.environ.get("WINDIR", "C:\\Windows"), "Fonts")
        else:
            base_dir = os.path.join(
                os.environ.get("LOCALAPPDATA", ""), "Microsoft", "Windows", "Fonts"
            )

        fonts = []
        try:
            key = winreg.OpenKey(hive, _REGISTRY_KEY)  # type: ignore[attr-defined]
            try:
                num_values = winreg.QueryInfoKey(key)[1]  # type: ignore[attr-defined]
                for i in range(num_values):
                    try:
                        value = winreg.EnumValue(key, i)  # type: ignore[attr-defined]
                        file_path = value[1]
                    except OSError:
                        continue
                    if not os.path.isabs(file_path):
                        file_path = os.path.join(base_dir, file_path)
                    if os.path.exists(file_path):
                        fonts.append(file_path)
            finally:
                winreg.CloseKey(key)  # type: ignore[attr-defined]
        except OSError as e:
            logger.debug(f"Could not access fonts registry: {e}")

        return fonts

    def _parse_font_file(self, font_path: str) -> FontFace | None:
        """Parse a font file into a FontFace.

        Note:
            - PostScript name from name ID 6 (required)
            - Family from name ID 16, falling back to ID 1
            - Style from name ID 17, falling back to ID 2
            - Weight, italic and width from the OS/2 table, with the head
              table's macStyle as a fallback for italic
        """
        try:
            font = TTFont(font_path, lazy=True)
        except Exception as e:
            logger.debug(f"Failed to parse font file '{font_path}': {e}")
            return None

        try:
            postscript_name = self._get_name_table_entry(font, 6)
            if not postscript_name:
                return None

            family = (
                self._get_name_table_entry(font, 16)
                or self._get_name_table_entry(font, 1)
                or "Unknown"
            )
            style = (
                self._get_name_table_entry(font, 17)
                or self._get_name_table_entry(font, 2)
                or "Regular"
            )
            css_weight, italic, width = self._get_os2_traits(font)
            weight = from_css_weight(css_weight)
            return FontFace(
                postscript_name=postscript_name,
                family=family,
                weight=weight,
                symbolic_traits=traits_from_style(italic, width, weight),
                style=style,
                file=font_path,
            )
        except Exception as e:
            logger.debug(f"Failed to read font tables of '{font_path}': {e}")
            return None
        finally:
            font.close()

    def _get_name_table_entry(self, font: TTFont, name_id: int) -> str | None:
        """Extract name table entry from font.

        Note:
            - Prefers Windows platform (3, 1, 0x409) - Windows, Unicode, US English
            - Falls back to Mac platform (1, 0, 0) - Mac, Roman, English
            - Returns first available if platform-specific lookups fail
        """
        if "name" not in font:
            return None

        name_table = font["name"]

        entry = name_table.getName(name_id, 3, 1, 0x409)
        if entry:
            return entry.toUnicode()

        entry = name_table.getName(name_id, 1, 0, 0)
        if entry:
            return entry.toUnicode()

        for record in name_table.names:
            if record.nameID == name_id:
                try:
                    return record.toUnicode()
                except UnicodeDecodeError:
                    continue

        return None

    def _get_os2_traits(self, font: TTFont) -> tuple[int, bool, float]:
        """Read CSS weight, italic flag and width percentage.

        Returns:
            ``(css_weight, italic, width)``; a font without an OS/2 table is
            treated as regular, upright and normal width.
        """
        italic = False
        if "head" in font:
            italic = bool(font["head"].macStyle & 0x02)

        if "OS/2" not in font:
            return 400, italic, 100.0

        os2_table = font["OS/2"]
        # fsSelection bit 0 is ITALIC, bit 9 is OBLIQUE.
        italic = italic or bool(os2_table.fsSelection & (1 << 0 | 1 << 9))
        width = WIDTH_CLASSES.get(os2_table.usWidthClass, 100.0)
        css_weight = os2_table.usWeightClass or 400
        return css_weight, italic, width
