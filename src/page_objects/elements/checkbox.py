"""
Checkbox element
"""

import logging

from ..models import ElementType
from ..waits import WaitType
from .base import BaseElement, check_state

logger = logging.getLogger(__name__)


class Checkbox(BaseElement):
    """Checkbox or radio input"""

    element_type = ElementType.CHECKBOX

    def check(self):
        """Check the box; no-op when already checked"""
        logger.info(f"Checking checkbox '{self.name}'")
        self._ready()
        self._act('check', self.element.check)
        return self

    def uncheck(self):
        """Uncheck the box; no-op when already unchecked"""
        logger.info(f"Unchecking checkbox '{self.name}'")
        self._ready()
        self._act('uncheck', self.element.uncheck)
        return self

    def set_checked(self, checked: bool):
        """Check or uncheck to match checked"""
        return self.check() if checked else self.uncheck()

    def is_checked(self) -> bool:
        """Current checked state"""
        self._ready(WaitType.PRESENT)
        checked = self._act('read state of', self.element.is_checked)
        logger.debug(f"Checkbox '{self.name}' is checked: {checked}")
        return checked

    def toggle(self):
        """Flip the checked state"""
        return self.set_checked(not self.is_checked())

    def verify_state(self, expected: bool):
        """Raise AssertionError unless the checkbox is in the expected state"""
        actual = self.is_checked()
        if actual != expected:
            raise AssertionError(
                f"Checkbox '{self.name}' expected to be {'checked' if expected else 'unchecked'} "
                f"but was {'checked' if actual else 'unchecked'}"
            )
        return self

    def is_enabled(self) -> bool:
        """False when disabled or missing"""
        return check_state(self.name, 'is enabled', self.element.is_enabled)
