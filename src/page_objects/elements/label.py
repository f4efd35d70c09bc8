"""
Label (read-only text) element
"""

import logging
import re

from ..models import ElementType
from ..waits import WaitType
from .base import BaseElement, check_state

logger = logging.getLogger(__name__)


class Label(BaseElement):
    """Read-only text; comparisons use the stripped inner text"""

    element_type = ElementType.LABEL

    def contains_text(self, expected: str) -> bool:
        """True if expected occurs in the text"""
        result = expected in self.get_text()
        logger.info(f"Label '{self.name}' contains '{expected}': {result}")
        return result

    def equals_text(self, expected: str) -> bool:
        """True if the text is exactly expected"""
        result = self.get_text() == expected
        logger.info(f"Label '{self.name}' equals '{expected}': {result}")
        return result

    def matches_pattern(self, pattern: str) -> bool:
        """Whole-text regular expression match"""
        result = re.fullmatch(pattern, self.get_text(), re.DOTALL) is not None
        logger.info(f"Label '{self.name}' matches /{pattern}/: {result}")
        return result

    def get_inner_html(self) -> str:
        """Inner HTML of the element"""
        self._ready(WaitType.PRESENT)
        return self._act('read inner HTML of', self.element.inner_html)

    def get_text_content(self) -> str:
        """Raw textContent, including text hidden by CSS"""
        self._ready(WaitType.PRESENT)
        return self._act('read text content of', self.element.text_content) or ''

    def is_clickable(self) -> bool:
        """Visible and enabled right now, without waiting"""
        return check_state(self.name, 'is clickable',
                     lambda: self.element.is_visible() and self.element.is_enabled())
