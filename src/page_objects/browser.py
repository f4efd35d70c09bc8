"""
Playwright browser session owned by one test
"""

import logging
from typing import Optional

from playwright.sync_api import Browser, Page, Playwright, sync_playwright

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

BROWSER_TYPES = ('chromium', 'firefox', 'webkit')


class BrowserSession:
    """
    Starts Playwright, launches the configured browser and opens one page.

    Use as a context manager so the browser is closed whether the test
    passes or fails:

        with BrowserSession() as session:
            session.open('/')
            home = factory.load_page('home', session.page)
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.page: Optional[Page] = None

    def start(self) -> 'BrowserSession':
        browser_type = self.settings.browser.lower()
        if browser_type not in BROWSER_TYPES:
            raise ValueError(f"Unsupported browser '{browser_type}', expected one of {BROWSER_TYPES}")

        self.playwright = sync_playwright().start()
        try:
            self.browser = getattr(self.playwright, browser_type).launch(
                headless=self.settings.headless,
                slow_mo=self.settings.slow_mo,
            )
            self.page = self.browser.new_page(viewport=self.settings.viewport)
            self.page.set_default_timeout(self.settings.default_timeout * 1000)
            self.page.set_default_navigation_timeout(self.settings.page_load_timeout * 1000)
        except Exception:
            self.close()
            raise
        logger.info(f"🚀 Started {browser_type} (headless={self.settings.headless})")
        return self

    @property
    def is_open(self) -> bool:
        return self.playwright is not None

    def url_for(self, path: str) -> str:
        if path.startswith(('http://', 'https://')):
            return path
        return self.settings.base_url.rstrip('/') + '/' + path.lstrip('/')

    def open(self, path: str = '/') -> Page:
        """Navigate to path, taken relative to the configured base url"""
        if self.page is None:
            raise RuntimeError("Browser session is not started")
        url = self.url_for(path)
        logger.info(f"→ Navigating to {url}")
        self.page.goto(url)
        return self.page

    def close(self):
        """Close browser and stop Playwright; calling it again does nothing"""
        if self.playwright is None:
            return
        try:
            if self.browser is not None:
                self.browser.close()
        finally:
            self.playwright.stop()
            self.playwright = None
            self.browser = None
            self.page = None
            logger.info("Browser session closed")

    def __enter__(self) -> 'BrowserSession':
        return self.start()

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
