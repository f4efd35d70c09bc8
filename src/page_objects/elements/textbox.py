"""
Textbox (input / textarea) element
"""

import logging

from ..models import ElementType
from .base import BaseElement

logger = logging.getLogger(__name__)


class Textbox(BaseElement):
    """Text entry field"""

    element_type = ElementType.TEXTBOX

    def type(self, text: str):
        """Type text key by key, appending to the current value"""
        logger.info(f"Typing '{text}' in textbox '{self.name}'")
        self._ready()
        self._act('type into', lambda: self.element.press_sequentially(text))
        return self

    def set_value(self, text: str):
        """Replace the value in one step"""
        logger.info(f"Setting value '{text}' in textbox '{self.name}'")
        self._ready()
        self._act('set value of', lambda: self.element.fill(text))
        return self

    def clear(self):
        """Empty the field"""
        logger.info(f"Clearing textbox '{self.name}'")
        self._ready()
        self._act('clear', self.element.clear)
        return self

    def clear_and_type(self, text: str):
        """Empty the field, then type text key by key"""
        self.clear()
        return self.type(text)

    def get_value(self) -> str:
        """Current value once the field is ready"""
        self._ready()
        value = self._act('read value of', self.element.input_value)
        logger.info(f"Value of textbox '{self.name}': '{value}'")
        return value

    def get_placeholder(self):
        """Placeholder attribute, None when absent"""
        return self.get_attribute('placeholder')

    def is_empty(self) -> bool:
        """True for an empty or whitespace-only value"""
        value = self.get_value()
        return value is None or not value.strip()

    def is_readonly(self) -> bool:
        """True when the readonly attribute is present, whatever its value"""
        return self.get_attribute('readonly') is not None

    def press_enter(self):
        return self._press('Enter')

    def press_tab(self):
        return self._press('Tab')

    def press_escape(self):
        return self._press('Escape')

    def focus(self):
        """Move keyboard focus to the field"""
        self._ready()
        self._act('focus', self.element.focus)
        return self

    def _press(self, key: str):
        logger.info(f"Pressing {key} in textbox '{self.name}'")
        self._ready()
        self._act(f"press {key} in", lambda: self.element.press(key))
        return self
