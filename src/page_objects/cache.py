"""
Caches for loaded page definitions and constructed element wrappers
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

from .models import ElementType, PageDefinition

logger = logging.getLogger(__name__)

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


@dataclass
class CacheEntry(Generic[V]):
    """A cached value with its access bookkeeping"""
    value: V
    created: float
    access_count: int = 0
    last_accessed: float = 0.0

    def touch(self):
        self.access_count += 1
        self.last_accessed = time.time()


class KeyedCache(Generic[K, V]):
    """
    Thread-safe in-memory map with explicit lifecycle.

    There is no expiry: entries live until remove() or clear(), so tests that
    rewrite page files must clear the cache in between.
    """

    def __init__(self, name: str = "cache"):
        self.name = name
        self._entries: Dict[K, CacheEntry[V]] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            entry.touch()
            return entry.value

    def put(self, key: K, value: V) -> V:
        with self._lock:
            self._entries[key] = CacheEntry(value=value, created=time.time())
        logger.debug(f"💾 {self.name}: cached {key!r}")
        return value

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        """Return the cached value for key, building and storing it on a miss"""
        with self._lock:
            value = self.get(key)
            if value is None:
                value = self.put(key, factory())
            return value

    def contains(self, key: K) -> bool:
        with self._lock:
            return key in self._entries

    def remove(self, key: K) -> bool:
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug(f"{self.name}: removed {key!r}")
        return removed

    def remove_where(self, predicate: Callable[[K], bool]) -> int:
        with self._lock:
            doomed = [key for key in self._entries if predicate(key)]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def clear(self):
        """Drop every entry; safe to call on an empty cache"""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        if count:
            logger.info(f"🧹 {self.name}: cleared {count} entries")

    def keys(self) -> List[K]:
        with self._lock:
            return list(self._entries)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key) -> bool:
        return self.contains(key)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            lookups = self._hits + self._misses
            return {
                'total_entries': len(self._entries),
                'hits': self._hits,
                'misses': self._misses,
                'total_accesses': sum(entry.access_count for entry in self._entries.values()),
                'cache_hit_rate': self._hits / lookups if lookups else 0.0,
            }

    def reset_stats(self):
        with self._lock:
            self._hits = 0
            self._misses = 0


class PageCache(KeyedCache[str, PageDefinition]):
    """Source identifier (resolved file path or page name) -> PageDefinition"""

    def __init__(self):
        super().__init__("page cache")


ElementKey = Tuple[str, str, ElementType, int]


class ElementCache(KeyedCache[ElementKey, Any]):
    """
    (page name, element name, element type, browser page) -> element wrapper

    Wrappers hold their browser page, so the browser page is part of the key:
    the same page definition loaded into a second browser page gets its own
    wrappers.
    """

    def __init__(self):
        super().__init__("element cache")

    @staticmethod
    def key(page_name: str, element_name: str, element_type: ElementType,
            browser_page: Any = None) -> ElementKey:
        return (page_name, element_name, element_type, id(browser_page))

    @staticmethod
    def _matches(key: ElementKey, page_name: Optional[str], browser_page: Any) -> bool:
        if page_name is not None and key[0] != page_name:
            return False
        return browser_page is None or key[3] == id(browser_page)

    def clear_page(self, page_name: str, browser_page: Any = None) -> int:
        """Drop the wrappers built for page_name, optionally only those bound to browser_page"""
        removed = self.remove_where(lambda key: self._matches(key, page_name, browser_page))
        if removed:
            logger.info(f"Cleared {removed} cached elements of page '{page_name}'")
        return removed

    def clear_browser_page(self, browser_page: Any) -> int:
        """Drop every wrapper bound to browser_page, e.g. once its session closed"""
        removed = self.remove_where(lambda key: self._matches(key, None, browser_page))
        if removed:
            logger.info(f"🧹 Cleared {removed} cached elements of a closed browser page")
        return removed

    def count_for_page(self, page_name: str, browser_page: Any = None) -> int:
        return sum(1 for key in self.keys() if self._matches(key, page_name, browser_page))
