"""
Wait policies applied before element actions
"""

import logging
import time
from enum import Enum
from typing import Callable, Union

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator

from .errors import ElementNotReady
from .models import ElementType

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.1


class WaitType(Enum):
    VISIBLE = 'visible'
    CLICKABLE = 'clickable'
    PRESENT = 'present'
    INVISIBLE = 'invisible'

    @classmethod
    def parse(cls, value: Union[str, 'WaitType']) -> 'WaitType':
        if isinstance(value, WaitType):
            return value
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise ValueError(
                f"Unknown wait type {value!r}, expected one of {', '.join(w.value for w in cls)}"
            )


# Playwright states for the keywords that map directly onto Locator.wait_for
_STATES = {
    WaitType.VISIBLE: 'visible',
    WaitType.PRESENT: 'attached',
    WaitType.INVISIBLE: 'hidden',
}

_CLICKABLE_TYPES = {
    ElementType.BUTTON,
    ElementType.DYNAMIC_BUTTON,
    ElementType.DYNAMIC_LINK,
    ElementType.CHECKBOX,
    ElementType.COMBOBOX,
}


def default_wait_type(element_type: ElementType) -> WaitType:
    """Wait policy used when an element definition does not name one"""
    if element_type in _CLICKABLE_TYPES:
        return WaitType.CLICKABLE
    return WaitType.VISIBLE


def wait_until(condition: Callable[[], bool], timeout: float,
               poll_interval: float = DEFAULT_POLL_INTERVAL) -> bool:
    """
    Poll condition until it returns True or timeout (seconds) elapses.

    Driver errors raised by the condition count as "not yet". Returns whether
    the condition was met.
    """
    deadline = time.monotonic() + timeout
    while True:
        try:
            if condition():
                return True
        except PlaywrightError:
            pass
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return False
        time.sleep(min(poll_interval, remaining))


def wait_for(locator: Locator, wait_type: Union[str, WaitType], timeout: float,
             element_name: str, locator_string: str):
    """Block until locator satisfies wait_type, raising ElementNotReady on timeout"""
    wait_type = WaitType.parse(wait_type)
    logger.debug(f"Waiting up to {timeout:g}s for '{element_name}' to be {wait_type.value}")
    started = time.monotonic()

    try:
        state = _STATES.get(wait_type, 'visible')
        locator.wait_for(state=state, timeout=timeout * 1000)
    except PlaywrightError as e:
        logger.warning(f"'{element_name}' ({locator_string}) not {wait_type.value} after {timeout:g}s: {e}")
        raise ElementNotReady(element_name, locator_string, wait_type.value, timeout) from e

    if wait_type is WaitType.CLICKABLE:
        remaining = max(0.0, timeout - (time.monotonic() - started))
        if not wait_until(locator.is_enabled, remaining):
            logger.warning(f"'{element_name}' ({locator_string}) visible but not enabled after {timeout:g}s")
            raise ElementNotReady(element_name, locator_string, wait_type.value, timeout)

    logger.debug(f"'{element_name}' is {wait_type.value}")
