"""Resolve abstract text styles into installed fonts.

The matching rules follow the way Cocoa text views pick fonts:

- the system family keeps the real system font and its metrics;
- a face name given where a family was expected is accepted, and the traits
  the caller left open are taken from that face;
- within a family, the *last* face in platform order whose italic/condensed
  traits match and whose weight falls in the requested class wins, which
  favours the heaviest of several qualifying faces;
- a family with no qualifying face falls back to its first member.
"""

import logging
import threading

from fontmatch.config import ResolverConfig
from fontmatch.core import traits, weights
from fontmatch.core.cache import StyleCache, get_default_cache
from fontmatch.core.constants import (
    BROKEN_SYSTEM_FONT,
    CONDENSED_TRAIT,
    FONT_STYLES,
    ITALIC_TRAIT,
    SYSTEM_FAMILY,
    WeightClass,
)
from fontmatch.core.fontconfig_fonts import HAS_FONTCONFIG, FontconfigRegistry
from fontmatch.core.file_fonts import FontFileRegistry
from fontmatch.core.registry import FamilyRegistry, FontHandle
from fontmatch.core.style import StyleInput, as_style, hash_style

logger = logging.getLogger(__name__)


def create_registry(config: ResolverConfig | None = None) -> FamilyRegistry:
    """Create the registry for this platform.

    fontconfig is used when it is importable, the font file scanner otherwise.
    ``config.backend`` forces one of them.
    """
    config = config or ResolverConfig.default()
    backend = config.backend
    if backend is None:
        backend = "fontconfig" if HAS_FONTCONFIG else "files"

    if backend == "fontconfig":
        if not HAS_FONTCONFIG:
            logger.warning(
                "fontconfig backend requested but fontconfig-py is not installed. "
                "Falling back to font file scanning."
            )
        else:
            logger.debug("Using fontconfig font registry")
            return FontconfigRegistry()

    logger.debug(f"Using font file registry (extra dirs: {config.font_dirs})")
    return FontFileRegistry(font_dirs=config.font_dirs)


class FontResolver:
    """Resolve style descriptors to font handles.

    Args:
        registry: Font registry to query. Defaults to :func:`create_registry`.
        cache: Style cache. Defaults to a new cache enabled according to
            ``config.use_cache``; pass :func:`get_default_cache` to share the
            process-wide one.
        config: Resolver settings. Defaults to ``ResolverConfig.default()``.

    Example:
        >>> resolver = FontResolver()
        >>> font = resolver.resolve({"fontFamily": "Helvetica", "fontWeight": "bold"})
        >>> font.postscript_name
        'Helvetica-Bold'
    """

    def __init__(
        self,
        registry: FamilyRegistry | None = None,
        cache: StyleCache | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        self.config = config or ResolverConfig.default()
        self.registry = registry or create_registry(self.config)
        self.cache = cache if cache is not None else StyleCache(self.config.use_cache)

    def resolve(self, style: StyleInput = None) -> FontHandle | None:
        """Find the installed font that best matches ``style``.

        Args:
            style: StyleDescriptor, or a mapping with ``fontFamily``,
                ``fontWeight``, ``fontStyle`` and ``fontSize`` keys. All keys
                are optional.

        Returns:
            The resolved font, or None when nothing suitable is installed.
            Repeated calls with an equivalent style return the same object.

        Raises:
            ValueError: If ``fontWeight`` is not a recognized weight keyword.
        """
        style = as_style(style)
        cache_key = hash_style(style)

        font = self.cache.get(cache_key)
        if font is not None:
            return font

        registry = self.registry
        default_family = registry.default_family_name()

        font_size = style.font_size if style.font_size else self.config.default_size
        weight_class = weights.classify(style.font_weight)
        family = (
            self.config.fallback_family
            if default_family == BROKEN_SYSTEM_FONT
            else default_family
        )
        if style.font_family is not None:
            family = style.font_family
        is_italic = FONT_STYLES.get(style.font_style or "", False)
        is_condensed = False

        found = False

        # The system font keeps its own metrics, so it is requested directly.
        if family == default_family or family == SYSTEM_FAMILY:
            font = registry.system_font(font_size, weights.anchor_of(weight_class))
            if font is not None:
                found = True
                if is_italic or is_condensed:
                    symbolic_traits = font.symbolic_traits
                    if is_italic:
                        symbolic_traits |= ITALIC_TRAIT
                    if is_condensed:
                        symbolic_traits |= CONDENSED_TRAIT
                    font = registry.font_with_traits(font, symbolic_traits, font_size)
            if font is not None:
                logger.debug(f"Resolved system font '{font.postscript_name}'")
                return self.cache.set(cache_key, font)

        font_names = registry.list_family_members(family)

        # Accept a face name given as family, e.g. "Helvetica-LightOblique".
        if not found and not font_names:
            font = registry.font_by_name(family, font_size)
            if font is not None:
                logger.debug(
                    f"'{family}' is a face of family '{font.family}', "
                    "using its traits"
                )
                family = font.family
                if style.font_weight is None:
                    weight_class = WeightClass.from_value(traits.weight_of(font))
                if not style.font_style:
                    is_italic = traits.is_italic(font)
                is_condensed = traits.is_condensed(font)
            else:
                logger.warning(f"Unrecognized font family '{family}'")
                font = registry.system_font(font_size, weights.anchor_of(weight_class))

        # No early exit: the heaviest matching face should win.
        for name in font_names:
            match = registry.font_by_name(name, font_size)
            if match is None:
                continue
            if (
                is_italic == traits.is_italic(match)
                and is_condensed == traits.is_condensed(match)
                and weights.in_range(traits.weight_of(match), weight_class)
            ):
                font = match

        # Single-face families such as Zapfino match nothing above.
        if font is None and font_names:
            font = registry.font_by_name(font_names[0], font_size)

        if font is None:
            logger.debug(f"No font found for {style.to_dict()}")
            return None

        logger.debug(f"Resolved {style.to_dict()} to '{font.postscript_name}'")
        return self.cache.set(cache_key, font)


# Global singleton instance (lazy initialization)
_resolver: FontResolver | None = None
_resolver_lock = threading.Lock()


def get_default_resolver() -> FontResolver:
    """Get or create the process-wide resolver sharing the default cache."""
    global _resolver
    with _resolver_lock:
        if _resolver is None:
            _resolver = FontResolver(cache=get_default_cache())
        return _resolver


def find_font(style: StyleInput = None) -> FontHandle | None:
    """Resolve ``style`` with the process-wide resolver.

    Example:
        >>> font = find_font({"fontFamily": "Arial", "fontStyle": "italic"})
    """
    return get_default_resolver().resolve(style)
