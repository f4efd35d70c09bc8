"""
Page factory: loads, validates and caches page definitions
"""

import logging
from pathlib import Path
from typing import Optional, Union

from playwright.sync_api import Page

from .cache import ElementCache, PageCache
from .config import Settings, get_settings
from .errors import InvalidPageDefinition
from .models import PageDefinition
from .page import DynamicPage

logger = logging.getLogger(__name__)

PageSource = Union[str, Path, PageDefinition]


class PageObjectFactory:
    """
    Builds DynamicPage objects from JSON page files or PageDefinitions.

    Caches are injected (fresh ones by default) so independent factories,
    e.g. one per test worker, never share state.
    """

    def __init__(self, browser_page: Optional[Page] = None,
                 page_cache: Optional[PageCache] = None,
                 element_cache: Optional[ElementCache] = None,
                 pages_dir: Optional[Union[str, Path]] = None,
                 default_timeout: Optional[float] = None,
                 settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.browser_page = browser_page
        self.page_cache = page_cache if page_cache is not None else PageCache()
        self.element_cache = element_cache if element_cache is not None else ElementCache()
        self.pages_dir = Path(pages_dir) if pages_dir is not None else settings.pages_dir
        self.default_timeout = default_timeout if default_timeout is not None else settings.default_timeout
        self.retry_attempts = settings.retry_attempts
        self.retry_delay = settings.retry_delay

    def resolve_path(self, source: Union[str, Path]) -> Path:
        """
        Locate the JSON file for source.

        Accepts an existing path, a path relative to pages_dir, or a bare page
        name looked up as ``<pages_dir>/<name>.json``.
        """
        path = Path(source)
        candidates = [path] if path.is_absolute() else [path, self.pages_dir / path]
        if path.suffix != '.json':
            candidates.append(self.pages_dir / f"{path}.json")
        for candidate in candidates:
            if candidate.is_file():
                return candidate.resolve()
        raise InvalidPageDefinition("Page JSON file not found", str(source))

    def cache_key(self, source: PageSource) -> str:
        if isinstance(source, PageDefinition):
            return source.page_name
        return str(self.resolve_path(source))

    def _parse(self, source: PageSource) -> PageDefinition:
        if isinstance(source, PageDefinition):
            definition = source
            definition.validate()
        else:
            path = self.resolve_path(source)
            definition = PageDefinition.from_json_file(path)
            definition.validate(str(path))
        logger.info(f"Successfully parsed page definition: {definition.page_name}")
        return definition

    def load_definition(self, source: PageSource) -> PageDefinition:
        """Cached PageDefinition for source, parsing and validating on first use"""
        key = self.cache_key(source)
        cached = self.page_cache.get(key)
        if cached is not None:
            logger.debug(f"Returning cached page for: {key}")
            return cached
        logger.info(f"Loading page from: {key}")
        definition = self._parse(source)
        return self.page_cache.put(key, definition)

    def load_page(self, source: PageSource, browser_page: Optional[Page] = None) -> DynamicPage:
        """
        Return a DynamicPage for source bound to browser_page (or the factory's page).

        Raises:
            InvalidPageDefinition: the source is missing, unparsable or invalid
        """
        browser_page = browser_page if browser_page is not None else self.browser_page
        if browser_page is None:
            raise ValueError("No browser page: pass one to load_page() or to the factory")
        definition = self.load_definition(source)
        return DynamicPage(definition, browser_page, self.element_cache, self.default_timeout,
                           retry_attempts=self.retry_attempts, retry_delay=self.retry_delay)

    def preload_page(self, source: PageSource):
        self.load_definition(source)

    def validate_page_definition(self, source: PageSource) -> bool:
        """True if source parses into a valid page; never raises"""
        try:
            self._parse(source)
        except InvalidPageDefinition as e:
            logger.warning(f"Invalid page definition: {e}")
            return False
        return True

    def is_cached(self, source: PageSource) -> bool:
        try:
            return self.page_cache.contains(self.cache_key(source))
        except InvalidPageDefinition:
            return False

    def remove_from_cache(self, source: PageSource) -> bool:
        key = self.cache_key(source)
        definition = self.page_cache.get(key)
        if definition is not None:
            self.element_cache.clear_page(definition.page_name)
        logger.info(f"Removing page from cache: {key}")
        return self.page_cache.remove(key)

    def release_browser_page(self, browser_page: Page) -> int:
        """Drop the wrappers bound to a browser page that is about to close"""
        return self.element_cache.clear_browser_page(browser_page)

    def cache_size(self) -> int:
        return self.page_cache.size()

    def clear_cache(self):
        """Forget every loaded page and built element; safe to call repeatedly"""
        logger.info("Clearing page cache")
        self.page_cache.clear()
        self.element_cache.clear()
