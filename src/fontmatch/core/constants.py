from enum import Enum

# Font displayed by macOS when the San Francisco fonts are missing.
BROKEN_SYSTEM_FONT = ".AppleSystemUIFont"

# Family keyword that always selects the platform system font.
SYSTEM_FAMILY = "System"

DEFAULT_FONT_SIZE = 14.0
FALLBACK_FAMILY = "Helvetica"

# Symbolic trait bits, same values as NSFontTraitMask.
ITALIC_TRAIT = 1 << 0
BOLD_TRAIT = 1 << 1
EXPANDED_TRAIT = 1 << 5
CONDENSED_TRAIT = 1 << 6

# Bits that must agree when matching a face against a request.
MATCH_TRAITS = ITALIC_TRAIT | CONDENSED_TRAIT

FONT_STYLES: dict[str, bool] = {
    "normal": False,
    "italic": True,
    "oblique": True,
}


class WeightClass(Enum):
    """Canonical weight buckets, valued by their anchor on the normalized axis."""

    ULTRALIGHT = -0.80
    THIN = -0.60
    LIGHT = -0.40
    REGULAR = 0.0
    MEDIUM = 0.23
    SEMIBOLD = 0.30
    BOLD = 0.40
    HEAVY = 0.56
    BLACK = 0.62

    @property
    def anchor(self) -> float:
        return float(self.value)

    @property
    def range(self) -> tuple[float, float]:
        return WEIGHT_RANGES[self]

    @classmethod
    def from_value(cls, value: float) -> "WeightClass":
        """Bucket a continuous weight into the class whose range contains it.

        Values below the axis belong to ULTRALIGHT and values at or above its
        upper end belong to BLACK.
        """
        for weight_class in cls:
            _, high = WEIGHT_RANGES[weight_class]
            if value < high:
                return weight_class
        return cls.BLACK


# Half-open [low, high) ranges; a value on a shared boundary is in the upper class.
WEIGHT_RANGES: dict[WeightClass, tuple[float, float]] = {
    WeightClass.ULTRALIGHT: (-1.0, -0.70),
    WeightClass.THIN: (-0.70, -0.45),
    WeightClass.LIGHT: (-0.45, -0.10),
    WeightClass.REGULAR: (-0.10, 0.10),
    WeightClass.MEDIUM: (0.10, 0.27),
    WeightClass.SEMIBOLD: (0.27, 0.35),
    WeightClass.BOLD: (0.35, 0.50),
    WeightClass.HEAVY: (0.50, 0.60),
    WeightClass.BLACK: (0.60, 1.0),
}

# Keyword order matters for the name-suffix heuristic: numeric keys first.
FONT_WEIGHTS: dict[str, WeightClass] = {
    "100": WeightClass.ULTRALIGHT,
    "200": WeightClass.THIN,
    "300": WeightClass.LIGHT,
    "400": WeightClass.REGULAR,
    "500": WeightClass.MEDIUM,
    "600": WeightClass.SEMIBOLD,
    "700": WeightClass.BOLD,
    "800": WeightClass.HEAVY,
    "900": WeightClass.BLACK,
    "normal": WeightClass.REGULAR,
    "bold": WeightClass.BOLD,
}

# CSS weight of each class, used by registries to convert OS/2 and fontconfig weights.
CSS_WEIGHTS: dict[WeightClass, int] = {
    WeightClass.ULTRALIGHT: 100,
    WeightClass.THIN: 200,
    WeightClass.LIGHT: 300,
    WeightClass.REGULAR: 400,
    WeightClass.MEDIUM: 500,
    WeightClass.SEMIBOLD: 600,
    WeightClass.BOLD: 700,
    WeightClass.HEAVY: 800,
    WeightClass.BLACK: 900,
}

# CSS weight (100-900) to fontconfig weight (0-210).
FONTCONFIG_WEIGHTS: dict[int, float] = {
    100: 0.0,  # thin
    200: 40.0,  # extralight
    300: 50.0,  # light
    400: 80.0,  # regular
    500: 100.0,  # medium
    600: 180.0,  # semibold
    700: 200.0,  # bold
    800: 205.0,  # extrabold
    900: 210.0,  # black
}
