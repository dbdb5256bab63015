from logging import getLogger

from fontmatch.config import ResolverConfig
from fontmatch.core.cache import StyleCache, get_default_cache
from fontmatch.core.constants import WeightClass
from fontmatch.core.registry import FamilyRegistry, FontFace, FontHandle
from fontmatch.core.style import StyleDescriptor, hash_style
from fontmatch.resolver import FontResolver, create_registry, find_font
from fontmatch.version import __version__ as __version__

logger = getLogger(__name__)

__all__ = [
    "FamilyRegistry",
    "FontFace",
    "FontHandle",
    "FontResolver",
    "ResolverConfig",
    "StyleCache",
    "StyleDescriptor",
    "WeightClass",
    "create_registry",
    "find_font",
    "get_default_cache",
    "hash_style",
]
