"""Memo of resolved fonts keyed by style hash."""

import logging
import threading

from fontmatch.core.registry import FontHandle

logger = logging.getLogger(__name__)


class StyleCache:
    """Thread-safe mapping from style hash to resolved font.

    Entries are only ever added: there is no eviction, expiry or removal, so a
    key keeps the first handle stored for it for the lifetime of the cache.
    A disabled cache never reports a hit and stores nothing.

    Example:
        >>> cache = StyleCache()
        >>> font = cache.set(key, resolved)
        >>> cache.get(key) is font
        True
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._entries: dict[str, FontHandle] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> FontHandle | None:
        if not self.enabled:
            return None
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, font: FontHandle) -> FontHandle:
        """Store ``font`` under ``key`` unless the key is already present.

        Returns:
            The handle held for ``key`` after the call. When another caller
            stored a handle first, that earlier handle is returned so that all
            callers share one instance.
        """
        if not self.enabled:
            return font
        with self._lock:
            return self._entries.setdefault(key, font)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return self.enabled and key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Global singleton instance (lazy initialization)
_cache: StyleCache | None = None
_cache_lock = threading.Lock()


def get_default_cache() -> StyleCache:
    """Get or create the process-wide style cache.

    The cache is enabled according to ``ResolverConfig.default().use_cache``
    at the time of first use.
    """
    global _cache
    with _cache_lock:
        if _cache is None:
            from fontmatch.config import ResolverConfig

            _cache = StyleCache(enabled=ResolverConfig.default().use_cache)
            logger.debug(f"Created default style cache (enabled={_cache.enabled})")
        return _cache
