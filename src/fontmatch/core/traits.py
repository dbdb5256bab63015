"""Trait introspection for resolved font handles."""

import logging

from fontmatch.core.constants import CONDENSED_TRAIT, FONT_WEIGHTS, ITALIC_TRAIT
from fontmatch.core.registry import FontHandle

logger = logging.getLogger(__name__)


def is_italic(font: FontHandle) -> bool:
    return (font.symbolic_traits & ITALIC_TRAIT) != 0


def is_condensed(font: FontHandle) -> bool:
    return (font.symbolic_traits & CONDENSED_TRAIT) != 0


def weight_of(font: FontHandle) -> float:
    """Continuous weight of ``font`` on the normalized axis.

    Faces without weight metadata report 0.0. For those the face name is
    checked for a weight keyword suffix (``-700``, ``-Bold``, ...); the first
    keyword in table order that matches wins. When nothing matches the 0.0 is
    returned as is.
    """
    weight = font.weight
    if weight == 0.0:
        name = font.font_name.lower()
        for keyword, weight_class in FONT_WEIGHTS.items():
            if name.endswith(keyword):
                logger.debug(
                    f"Inferred weight {weight_class.name.lower()} for "
                    f"'{font.font_name}' from its name"
                )
                return weight_class.anchor
    return weight
