"""Weight classification on the normalized weight axis.

Requested weights (CSS keywords or numeric strings) are bucketed into one of
nine :class:`WeightClass` values. Each class has an anchor, the single value
used when asking the platform for a font, and a half-open range used to test
whether an existing face belongs to the class.

Registries report weights on other scales (OS/2 ``usWeightClass``, fontconfig
0-210); the helpers at the bottom of this module convert them onto the
normalized axis.
"""

import math
from typing import Optional, Union

from fontmatch.core.constants import (
    CSS_WEIGHTS,
    FONT_WEIGHTS,
    FONTCONFIG_WEIGHTS,
    WEIGHT_RANGES,
    WeightClass,
)

WeightInput = Union[str, int]

DEFAULT_WEIGHT = WeightClass.REGULAR

_LIGHTEST = WeightClass.ULTRALIGHT
_HEAVIEST = WeightClass.BLACK


def classify(weight: Optional[WeightInput]) -> WeightClass:
    """Map a weight keyword to its canonical class.

    Args:
        weight: ``"normal"``, ``"bold"`` or ``"100"``..``"900"``. Integers are
            accepted in place of numeric strings. ``None`` selects the default.

    Returns:
        The matching weight class.

    Raises:
        ValueError: If the keyword is not one of the eleven recognized values.
    """
    if weight is None:
        return DEFAULT_WEIGHT
    try:
        return FONT_WEIGHTS[str(weight)]
    except KeyError as e:
        raise ValueError(f"Unknown font weight: {weight!r}") from e


def range_of(weight_class: WeightClass) -> tuple[float, float]:
    """Half-open ``[low, high)`` interval used to match existing faces."""
    return WEIGHT_RANGES[weight_class]


def anchor_of(weight_class: WeightClass) -> float:
    """Value passed to the platform when requesting a font of this class."""
    return weight_class.anchor


def in_range(value: float, weight_class: WeightClass) -> bool:
    """Whether ``value`` falls in the range of ``weight_class``.

    The outer ends of the axis are open, so values below the lightest range
    belong to ULTRALIGHT and values at or above the heaviest to BLACK, as in
    :meth:`WeightClass.from_value`.
    """
    low, high = range_of(weight_class)
    if weight_class is _LIGHTEST:
        low = -math.inf
    if weight_class is _HEAVIEST:
        high = math.inf
    return low <= value < high


def _interpolate(x: float, points: list[tuple[float, float]]) -> float:
    """Piecewise linear interpolation, clamped to the end points."""
    if x <= points[0][0]:
        return points[0][1]
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        if x <= x1:
            return y0 + (x - x0) / (x1 - x0) * (y1 - y0)
    return points[-1][1]


_CSS_TO_AXIS = [(float(css), wc.anchor) for wc, css in CSS_WEIGHTS.items()]
_FONTCONFIG_TO_CSS = [(fc, float(css)) for css, fc in FONTCONFIG_WEIGHTS.items()]


def from_css_weight(css_weight: float) -> float:
    """Convert a CSS/OS-2 weight (100-900) to the normalized axis.

    Standard weights land on their class anchor; intermediate weights are
    interpolated between the neighbouring anchors.
    """
    return round(_interpolate(float(css_weight), _CSS_TO_AXIS), 4)


def to_css_weight(value: float) -> int:
    """CSS weight of the class containing ``value``."""
    return CSS_WEIGHTS[WeightClass.from_value(value)]


def from_fontconfig_weight(fc_weight: float) -> float:
    """Convert a fontconfig weight (0-210) to the normalized axis."""
    css_weight = _interpolate(float(fc_weight), _FONTCONFIG_TO_CSS)
    return from_css_weight(css_weight)


def to_fontconfig_weight(value: float) -> float:
    """Fontconfig weight of the class containing ``value``."""
    return FONTCONFIG_WEIGHTS[to_css_weight(value)]
