"""
Dynamic elements: the locator holds one placeholder filled per call
"""

import logging
from typing import Callable, Optional, Tuple, TypeVar

from playwright.sync_api import Locator

from ..locators import substitute
from ..models import ElementType
from ..waits import WaitType
from .base import ElementWrapper, check_state, locate, perform

logger = logging.getLogger(__name__)

T = TypeVar('T')

OPEN_WINDOW_SCRIPT = "url => window.open(url, '_blank')"


class DynamicElement(ElementWrapper):
    """
    Template wrapper. No handle is kept between calls: each operation
    substitutes its parameter into the template and resolves a fresh locator.
    """

    def bind(self, parameter) -> Tuple[str, Locator]:
        """Return the concrete locator string and handle for parameter"""
        concrete = substitute(self.locator, parameter)
        logger.debug(f"Dynamic locator for '{self.name}' with parameter '{parameter}': {concrete}")
        return concrete, locate(self.page, concrete)

    def _run(self, parameter, action: str, func: Callable[[Locator], T],
             wait_type: Optional[WaitType] = None) -> T:
        """Bind parameter, wait, then call func on the handle"""
        concrete, handle = self.bind(parameter)
        self._wait(handle, concrete, wait_type)
        return perform(self.name, concrete, action, lambda: func(handle))

    def _check_state(self, parameter, what: str, func: Callable[[Locator], bool]) -> bool:
        _, handle = self.bind(parameter)
        return check_state(self.name, what, lambda: func(handle))

    def get_text(self, parameter) -> str:
        """Stripped inner text of the element matching parameter"""
        text = self._run(parameter, 'get text from', lambda h: h.inner_text(), WaitType.VISIBLE).strip()
        logger.info(f"Text '{text}' from '{self.name}' with parameter '{parameter}'")
        return text

    def is_displayed(self, parameter) -> bool:
        """True if the element for parameter is visible now"""
        return self._check_state(parameter, 'is displayed', lambda h: h.is_visible())

    def wait_visible(self, parameter):
        """Wait for the element for parameter to become visible"""
        concrete, handle = self.bind(parameter)
        self._wait(handle, concrete, WaitType.VISIBLE)
        return self


class DynamicLabel(DynamicElement):
    """Text looked up by a runtime value, e.g. a suggestion for a typed city"""

    element_type = ElementType.DYNAMIC_LABEL

    def contains_text(self, parameter, expected: str) -> bool:
        """True if expected occurs in the text for parameter"""
        result = expected in self.get_text(parameter)
        logger.info(f"Dynamic label '{self.name}' [{parameter}] contains '{expected}': {result}")
        return result

    def equals_text(self, parameter, expected: str) -> bool:
        """True if the text for parameter is exactly expected"""
        result = self.get_text(parameter) == expected
        logger.info(f"Dynamic label '{self.name}' [{parameter}] equals '{expected}': {result}")
        return result


class DynamicButton(DynamicElement):
    """Button chosen by a runtime value; waits for clickable"""

    element_type = ElementType.DYNAMIC_BUTTON

    def click(self, parameter):
        """Wait until the button for parameter is clickable, then click"""
        logger.info(f"Clicking dynamic button '{self.name}' with parameter '{parameter}'")
        self._run(parameter, 'click', lambda h: h.click())
        return self

    def double_click(self, parameter):
        """Double click the button for parameter"""
        logger.info(f"Double clicking dynamic button '{self.name}' with parameter '{parameter}'")
        self._run(parameter, 'double click', lambda h: h.dblclick())
        return self

    def right_click(self, parameter):
        """Right click the button for parameter"""
        logger.info(f"Right clicking dynamic button '{self.name}' with parameter '{parameter}'")
        self._run(parameter, 'right click', lambda h: h.click(button='right'))
        return self

    def is_enabled(self, parameter) -> bool:
        """False when the button for parameter is disabled or missing"""
        return self._check_state(parameter, 'is enabled', lambda h: h.is_enabled())

    def wait_clickable(self, parameter):
        """Wait for the button for parameter to become clickable"""
        concrete, handle = self.bind(parameter)
        self._wait(handle, concrete, WaitType.CLICKABLE)
        return self


class DynamicLink(DynamicElement):
    """Link chosen by a runtime value"""

    element_type = ElementType.DYNAMIC_LINK

    def click(self, parameter):
        """Click the link for parameter"""
        logger.info(f"Clicking dynamic link '{self.name}' with parameter '{parameter}'")
        self._run(parameter, 'click', lambda h: h.click())
        return self

    def get_href(self, parameter) -> Optional[str]:
        """href of the link for parameter, None when absent"""
        href = self._run(parameter, 'read href of', lambda h: h.get_attribute('href'), WaitType.PRESENT)
        logger.info(f"Href of '{self.name}' with parameter '{parameter}': {href!r}")
        return href

    def open_in_new_tab(self, parameter):
        """
        Open the link target in a new tab via window.open.

        Does nothing when the link has no href.
        """
        href = self.get_href(parameter)
        if href:
            perform(self.name, self.locator, 'open in new tab',
                    lambda: self.page.evaluate(OPEN_WINDOW_SCRIPT, href))
            logger.info(f"Opened '{href}' from '{self.name}' in a new tab")
        return self
