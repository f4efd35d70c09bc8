"""
Combobox (native <select>) element
"""

import logging
from typing import List

from ..models import ElementType
from ..waits import WaitType
from .base import BaseElement

logger = logging.getLogger(__name__)


class Combobox(BaseElement):
    """
    Native <select> element.

    Selection waits for clickable; reads only need the element attached.
    """

    element_type = ElementType.COMBOBOX

    def select_by_text(self, text: str):
        """Select the option whose visible text is text"""
        logger.info(f"Selecting option '{text}' in combobox '{self.name}'")
        self._ready()
        self._act(f"select option '{text}' in", lambda: self.element.select_option(label=text))
        return self

    def select_by_value(self, value: str):
        """Select the option whose value attribute is value"""
        logger.info(f"Selecting value '{value}' in combobox '{self.name}'")
        self._ready()
        self._act(f"select value '{value}' in", lambda: self.element.select_option(value=value))
        return self

    def select_by_index(self, index: int):
        """Select the index-th option, counting from 0"""
        logger.info(f"Selecting index {index} in combobox '{self.name}'")
        self._ready()
        self._act(f"select index {index} in", lambda: self.element.select_option(index=index))
        return self

    def get_selected_option(self) -> str:
        """Visible text of the selected option"""
        self._ready(WaitType.PRESENT)
        selected = self.element.locator('option:checked')
        text = self._act('read selected option of', lambda: selected.first.inner_text())
        return text.strip()

    def get_selected_value(self) -> str:
        """Value attribute of the selected option"""
        self._ready(WaitType.PRESENT)
        return self._act('read selected value of', self.element.input_value)

    def get_all_options(self) -> List[str]:
        """Stripped text of every option, in document order"""
        self._ready(WaitType.PRESENT)
        options = self._act('read options of', lambda: self.element.locator('option').all_inner_texts())
        return [option.strip() for option in options]

    def has_option(self, text: str) -> bool:
        """True if an option shows text, ignoring surrounding whitespace"""
        return text.strip() in self.get_all_options()
