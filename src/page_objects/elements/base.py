"""
Base classes and shared helpers for element wrappers
"""

import logging
from typing import Callable, Optional, TypeVar, Union

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page

from ..errors import ActionFailed
from ..locators import resolve
from ..models import ElementType
from ..waits import WaitType, default_wait_type, wait_for

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_TIMEOUT = 10.0

HIGHLIGHT_SCRIPT = "el => { el.style.outline = '3px solid red'; el.style.outlineOffset = '1px'; }"


def locate_all(page: Page, locator: str) -> Locator:
    """Lazy Playwright Locator over every node matching locator"""
    return page.locator(resolve(locator).selector)


def locate(page: Page, locator: str) -> Locator:
    """
    Locator bound to the first node matching locator.

    Playwright locators are strict; wrappers of a single element always
    bind to the first match.
    """
    return locate_all(page, locator).first


def perform(element_name: str, locator: str, action: str, func: Callable[[], T]) -> T:
    """Run a driver call, turning driver errors into ActionFailed"""
    try:
        return func()
    except PlaywrightError as e:
        logger.error(f"Failed to {action} '{element_name}' ({locator}): {e}")
        raise ActionFailed(element_name, locator, action, e) from e


def check_state(element_name: str, what: str, func: Callable[[], bool]) -> bool:
    """Non-asserting boolean check: any driver error reads as False"""
    try:
        result = bool(func())
    except PlaywrightError as e:
        logger.debug(f"'{element_name}' {what} check failed, treating as False: {e}")
        return False
    logger.debug(f"'{element_name}' {what}: {result}")
    return result


class ElementWrapper:
    """Fields and helpers shared by static and dynamic wrappers"""

    element_type = ElementType.LABEL

    def __init__(self, page: Page, locator: str, name: str,
                 timeout: float = DEFAULT_TIMEOUT,
                 wait_type: Optional[Union[str, WaitType]] = None):
        self.page = page
        self.locator = locator
        self.name = name
        self.timeout = timeout
        self.wait_type = WaitType.parse(wait_type) if wait_type else default_wait_type(self.element_type)

    def _wait(self, handle: Locator, locator: str, wait_type: Optional[WaitType] = None):
        """Apply wait_type (or this element's policy) to handle"""
        wait_for(handle, wait_type or self.wait_type, self.timeout, self.name, locator)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, locator={self.locator!r})"


class BaseElement(ElementWrapper):
    """
    Wrapper bound to one element handle.

    Every read or mutating action applies the wait policy first; a timeout
    surfaces as ElementNotReady and is not retried here.
    """

    def __init__(self, page: Page, locator: str, name: str,
                 timeout: float = DEFAULT_TIMEOUT,
                 wait_type: Optional[Union[str, WaitType]] = None,
                 handle: Optional[Locator] = None):
        super().__init__(page, locator, name, timeout, wait_type)
        self.element: Locator = handle if handle is not None else self._bind(page, locator)
        logger.debug(f"Created {type(self).__name__} '{name}' with locator: {locator}")

    def _bind(self, page: Page, locator: str) -> Locator:
        """Handle this wrapper acts on: the first match of locator"""
        return locate(page, locator)

    def _ready(self, wait_type: Optional[WaitType] = None):
        self._wait(self.element, self.locator, wait_type)

    def _act(self, action: str, func: Callable[[], T]) -> T:
        return perform(self.name, self.locator, action, func)

    def is_displayed(self) -> bool:
        """True if the element is visible right now; never waits or raises"""
        return check_state(self.name, 'is displayed', self.element.is_visible)

    def exists(self) -> bool:
        """True if the element is attached to the DOM, visible or not"""
        return check_state(self.name, 'exists', lambda: self.element.count() > 0)

    def wait_visible(self):
        """Block until visible; raises ElementNotReady on timeout"""
        self._ready(WaitType.VISIBLE)
        return self

    def wait_clickable(self):
        """Block until visible and enabled"""
        self._ready(WaitType.CLICKABLE)
        return self

    def wait_present(self):
        """Block until attached to the DOM"""
        self._ready(WaitType.PRESENT)
        return self

    def wait_invisible(self):
        """Block until hidden or detached"""
        self._ready(WaitType.INVISIBLE)
        return self

    def get_text(self) -> str:
        """Visible text of the element, stripped"""
        logger.info(f"Getting text from element '{self.name}'")
        self._ready(WaitType.VISIBLE)
        text = self._act('get text from', self.element.inner_text).strip()
        logger.info(f"Text from element '{self.name}': '{text}'")
        return text

    def get_attribute(self, attribute: str) -> Optional[str]:
        """Attribute value, or None when the attribute is absent"""
        self._ready(WaitType.PRESENT)
        value = self._act(f"read attribute '{attribute}' of", lambda: self.element.get_attribute(attribute))
        logger.info(f"Attribute '{attribute}' of '{self.name}': {value!r}")
        return value

    def scroll_into_view(self):
        """Scroll the element into the viewport"""
        logger.info(f"Scrolling to element '{self.name}'")
        self._ready(WaitType.PRESENT)
        self._act('scroll to', self.element.scroll_into_view_if_needed)
        return self

    def highlight(self):
        """Outline the element in red, useful in headed debugging runs"""
        self._ready(WaitType.PRESENT)
        self._act('highlight', lambda: self.element.evaluate(HIGHLIGHT_SCRIPT))
        return self

    def hover(self):
        """Move the mouse over the element"""
        logger.info(f"Hovering over '{self.name}'")
        self._ready(WaitType.VISIBLE)
        self._act('hover over', self.element.hover)
        return self
