import logging
from collections import Counter
from collections.abc import Callable, Iterable

import pytest

from fontmatch import FontFace, FontHandle, ResolverConfig, StyleCache
from fontmatch.core.constants import CONDENSED_TRAIT, ITALIC_TRAIT, MATCH_TRAITS
from fontmatch.resolver import FontResolver

logger = logging.getLogger(__name__)

SYSTEM_FAMILY = ".SF NS"


class FakeRegistry:
    """In-memory registry that counts every call made to it.

    Family members are returned in the order the faces were given, standing in
    for the platform's own ordering. Names listed in ``extra_members`` belong to
    a family but have no face, like fonts that fail to load.
    """

    def __init__(
        self,
        faces: Iterable[FontFace],
        system_family: str | None = SYSTEM_FAMILY,
        extra_members: dict[str, list[str]] | None = None,
    ) -> None:
        self.faces: dict[str, FontFace] = {}
        self.families: dict[str, list[str]] = {}
        for face in faces:
            self.faces[face.postscript_name] = face
            self.families.setdefault(face.family, []).append(face.postscript_name)
        for family, names in (extra_members or {}).items():
            self.families.setdefault(family, []).extend(names)
        self.system_family = system_family
        self.calls: Counter[str] = Counter()

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    def list_family_members(self, family: str) -> list[str]:
        self.calls["list_family_members"] += 1
        return list(self.families.get(family, []))

    def font_by_name(self, name: str, size: float) -> FontHandle | None:
        self.calls["font_by_name"] += 1
        face = self.faces.get(name)
        return FontHandle.from_face(face, size) if face else None

    def system_font(
        self, size: float, weight: float | None = None
    ) -> FontHandle | None:
        self.calls["system_font"] += 1
        faces = [
            self.faces[name]
            for name in self.families.get(self.system_family or "", [])
            if not self.faces[name].symbolic_traits & ITALIC_TRAIT
        ]
        if not faces:
            return None
        target = 0.0 if weight is None else weight
        face = min(faces, key=lambda face: abs(face.weight - target))
        return FontHandle.from_face(face, size)

    def default_family_name(self) -> str:
        self.calls["default_family_name"] += 1
        return self.system_family or ""

    def font_with_traits(
        self, font: FontHandle, traits: int, size: float
    ) -> FontHandle | None:
        self.calls["font_with_traits"] += 1
        wanted = traits & MATCH_TRAITS
        for name in self.families.get(font.family, []):
            face = self.faces[name]
            if face.symbolic_traits & MATCH_TRAITS == wanted:
                return FontHandle.from_face(face, size)
        return None


def face(
    name: str,
    family: str,
    weight: float = 0.0,
    italic: bool = False,
    condensed: bool = False,
) -> FontFace:
    """Shorthand for building test faces."""
    traits = (ITALIC_TRAIT if italic else 0) | (CONDENSED_TRAIT if condensed else 0)
    return FontFace(
        postscript_name=name, family=family, weight=weight, symbolic_traits=traits
    )


DEFAULT_FACES = [
    face(".SFNS-Regular", SYSTEM_FAMILY, 0.0),
    face(".SFNS-Bold", SYSTEM_FAMILY, 0.4),
    face(".SFNS-Italic", SYSTEM_FAMILY, 0.0, italic=True),
    face("Helvetica-Light", "Helvetica", -0.4),
    face("Helvetica", "Helvetica", 0.0),
    face("Helvetica-Oblique", "Helvetica", 0.0, italic=True),
    face("Helvetica-Bold", "Helvetica", 0.4),
    face("Helvetica-BoldOblique", "Helvetica", 0.4, italic=True),
    face("Zapfino", "Zapfino", 0.0),
]


@pytest.fixture
def make_registry() -> Callable[..., FakeRegistry]:
    """Factory for registries with the default faces plus extras."""

    def _make(
        extra_faces: Iterable[FontFace] = (),
        system_family: str | None = SYSTEM_FAMILY,
        extra_members: dict[str, list[str]] | None = None,
        include_defaults: bool = True,
    ) -> FakeRegistry:
        faces = list(DEFAULT_FACES) if include_defaults else []
        faces.extend(extra_faces)
        return FakeRegistry(faces, system_family, extra_members)

    return _make


@pytest.fixture
def registry(make_registry: Callable[..., FakeRegistry]) -> FakeRegistry:
    return make_registry()


@pytest.fixture
def resolver(registry: FakeRegistry) -> FontResolver:
    """Resolver with a private, enabled cache."""
    return FontResolver(
        registry=registry, cache=StyleCache(), config=ResolverConfig()
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FONTMATCH_* variables from the caller's shell out of the tests."""
    for key in (
        "FONTMATCH_USE_CACHE",
        "FONTMATCH_DEFAULT_SIZE",
        "FONTMATCH_FALLBACK_FAMILY",
        "FONTMATCH_FONT_DIRS",
        "FONTMATCH_BACKEND",
    ):
        monkeypatch.delenv(key, raising=False)
