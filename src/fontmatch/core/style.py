"""Style descriptors and their cache keys."""

import dataclasses
import hashlib
import json
from collections.abc import Mapping
from typing import Any, Optional, Union

try:
    from typing import Self  # type: ignore
except ImportError:
    from typing_extensions import Self

# Accepted spellings of each descriptor field.
_FIELD_ALIASES: dict[str, str] = {
    "fontFamily": "font_family",
    "fontWeight": "font_weight",
    "fontStyle": "font_style",
    "fontSize": "font_size",
    "font_family": "font_family",
    "font_weight": "font_weight",
    "font_style": "font_style",
    "font_size": "font_size",
}


@dataclasses.dataclass(frozen=True)
class StyleDescriptor:
    """Abstract text style to resolve into a font.

    Attributes:
        font_family: Family name, face name, or ``"System"``.
        font_weight: ``"normal"``, ``"bold"`` or ``"100"``..``"900"``; an empty
            string is the same as no weight.
        font_style: ``"normal"``, ``"italic"`` or ``"oblique"``.
        font_size: Point size; falsy values select the default size.
    """

    font_family: Optional[str] = None
    font_weight: Optional[str] = None
    font_style: Optional[str] = None
    font_size: Optional[float] = None

    def __post_init__(self) -> None:
        # An empty weight means the default weight, same as an absent one.
        if self.font_weight == "":
            object.__setattr__(self, "font_weight", None)
        elif self.font_weight is not None and not isinstance(self.font_weight, str):
            object.__setattr__(self, "font_weight", str(self.font_weight))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Create a descriptor from camelCase or snake_case keys.

        Unknown keys are ignored, as are keys whose value is None.
        """
        kwargs = {
            _FIELD_ALIASES[key]: value
            for key, value in data.items()
            if key in _FIELD_ALIASES and value is not None
        }
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """camelCase dictionary with absent fields omitted."""
        data = {
            "fontFamily": self.font_family,
            "fontWeight": self.font_weight,
            "fontStyle": self.font_style,
            "fontSize": self.font_size,
        }
        return {key: value for key, value in data.items() if value is not None}


StyleInput = Union[StyleDescriptor, Mapping[str, Any], None]


def as_style(style: StyleInput) -> StyleDescriptor:
    if style is None:
        return StyleDescriptor()
    if isinstance(style, StyleDescriptor):
        return style
    return StyleDescriptor.from_dict(style)


def hash_style(style: StyleInput) -> str:
    """Stable cache key for a style descriptor.

    Descriptors that differ only in key spelling or in the type of the weight
    (``700`` vs ``"700"``) share a key.
    """
    payload = json.dumps(
        as_style(style).to_dict(), sort_keys=True, separators=(",", ":")
    )
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()
