"""Resolver configuration.

Settings can be given to the constructor or read from environment variables
with :meth:`ResolverConfig.default`.
"""

import logging
import os
from dataclasses import dataclass, field

from fontmatch.core.constants import DEFAULT_FONT_SIZE, FALLBACK_FAMILY

logger = logging.getLogger(__name__)

BACKENDS = ("fontconfig", "files")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ResolverConfig:
    """Configuration for :class:`fontmatch.FontResolver`.

    Environment variables:
        FONTMATCH_USE_CACHE: Enable the style cache (default: true).
        FONTMATCH_DEFAULT_SIZE: Size used when a style has none (default: 14).
        FONTMATCH_FALLBACK_FAMILY: Family substituted when the platform reports
            the broken macOS system font (default: Helvetica).
        FONTMATCH_FONT_DIRS: Extra font directories for the file registry,
            separated by ``os.pathsep``.
        FONTMATCH_BACKEND: Force a registry backend, ``fontconfig`` or
            ``files`` (default: fontconfig when available).

    Example:
        >>> # Read from the environment
        >>> config = ResolverConfig.default()
        >>>
        >>> # Deterministic lookups in tests
        >>> config = ResolverConfig(use_cache=False)
    """

    use_cache: bool = True
    default_size: float = DEFAULT_FONT_SIZE
    fallback_family: str = FALLBACK_FAMILY
    font_dirs: list[str] = field(default_factory=list)
    backend: str | None = None

    def __post_init__(self) -> None:
        if self.default_size <= 0:
            raise ValueError(f"default_size must be positive: {self.default_size}")
        if self.backend is not None and self.backend not in BACKENDS:
            raise ValueError(
                f"Unknown backend {self.backend!r}, expected one of {BACKENDS}"
            )

    @classmethod
    def default(cls) -> "ResolverConfig":
        """Create ResolverConfig with values from environment variables.

        Returns:
            ResolverConfig instance with values from environment variables,
            falling back to hardcoded defaults if not set.

        Raises:
            ValueError: If an environment variable holds an invalid value.
        """

        def parse_env_bool(key: str, default: bool) -> bool:
            value_str = os.environ.get(key)
            if value_str is None or not value_str.strip():
                return default
            value = value_str.strip().lower()
            if value in _TRUE_VALUES:
                return True
            if value in _FALSE_VALUES:
                return False
            raise ValueError(
                f"Environment variable {key}={value_str!r} is not a valid boolean"
            )

        def parse_env_float(key: str, default: float) -> float:
            value_str = os.environ.get(key)
            if value_str is None:
                return default
            try:
                value = float(value_str)
            except ValueError as e:
                raise ValueError(
                    f"Environment variable {key}={value_str!r} is not a valid number"
                ) from e
            if value <= 0:
                logger.warning(
                    f"Environment variable {key}={value} is not positive, "
                    f"using default {default}."
                )
                return default
            return value

        font_dirs = [
            path
            for path in os.environ.get("FONTMATCH_FONT_DIRS", "").split(os.pathsep)
            if path
        ]
        backend = os.environ.get("FONTMATCH_BACKEND") or None

        return cls(
            use_cache=parse_env_bool("FONTMATCH_USE_CACHE", True),
            default_size=parse_env_float("FONTMATCH_DEFAULT_SIZE", DEFAULT_FONT_SIZE),
            fallback_family=os.environ.get("FONTMATCH_FALLBACK_FAMILY")
            or FALLBACK_FAMILY,
            font_dirs=font_dirs,
            backend=backend.lower() if backend else None,
        )
