"""
Button element
"""

import logging

from ..models import ElementType
from ..waits import WaitType
from .base import BaseElement, check_state

logger = logging.getLogger(__name__)

CLICK_SCRIPT = "el => el.click()"
CSS_VALUE_SCRIPT = "(el, prop) => window.getComputedStyle(el).getPropertyValue(prop)"


class Button(BaseElement):
    """Clickable control; waits for clickable before acting"""

    element_type = ElementType.BUTTON

    def click(self):
        """Wait until clickable, then click"""
        logger.info(f"Clicking button '{self.name}'")
        self._ready()
        self._act('click', self.element.click)
        logger.info(f"Successfully clicked button '{self.name}'")
        return self

    def double_click(self):
        """Wait until clickable, then double click"""
        logger.info(f"Double clicking button '{self.name}'")
        self._ready()
        self._act('double click', self.element.dblclick)
        return self

    def right_click(self):
        """Wait until clickable, then click with the right mouse button"""
        logger.info(f"Right clicking button '{self.name}'")
        self._ready()
        self._act('right click', lambda: self.element.click(button='right'))
        return self

    def click_via_script(self):
        """Dispatch the click from JavaScript, bypassing overlay and actionability checks"""
        logger.info(f"Clicking button '{self.name}' using JavaScript")
        self._ready(WaitType.PRESENT)
        self._act('click (script)', lambda: self.element.evaluate(CLICK_SCRIPT))
        return self

    def is_enabled(self) -> bool:
        """False when disabled or missing"""
        return check_state(self.name, 'is enabled', self.element.is_enabled)

    def is_disabled(self) -> bool:
        return not self.is_enabled()

    def get_css_value(self, prop: str) -> str:
        """Computed style value of prop, e.g. background-color"""
        self._ready(WaitType.PRESENT)
        return self._act(f"read CSS '{prop}' of", lambda: self.element.evaluate(CSS_VALUE_SCRIPT, prop))
