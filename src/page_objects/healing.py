"""
Resilient locators: ordered fallback chains and bounded retries

Two separate primitives live here:

- ``try_in_order`` picks between *alternative* strategies. The first one that
  succeeds wins; if all fail, every individual failure is reported.
- ``retry`` repeats *one* operation a fixed number of times to ride out
  transient flakiness.

``ResilientElement`` composes them: each candidate locator is retried
``retry_attempts`` times before the chain moves on to the next candidate.
"""

import functools
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

from playwright.sync_api import Locator, Page

from .elements.base import DEFAULT_TIMEOUT, check_state, locate, perform
from .errors import AllCandidatesFailed
from .waits import WaitType, wait_for

logger = logging.getLogger(__name__)

T = TypeVar('T')


def try_in_order(actions: Sequence[Callable[[], T]],
                 names: Optional[Sequence[str]] = None,
                 what: str = "operation") -> T:
    """
    Run actions strictly in order and return the first successful result.

    Later actions are never invoked once one succeeds. Each action must
    perform its whole effect or raise, so a failed candidate leaves nothing
    behind for the next one to trip over.

    Raises:
        AllCandidatesFailed: every action raised; carries (name, error) pairs
        ValueError: no actions, or names does not match actions
    """
    if not actions:
        raise ValueError("try_in_order needs at least one action")
    if names is None:
        names = [getattr(action, '__name__', None) or f"candidate {i + 1}" for i, action in enumerate(actions)]
    if len(names) != len(actions):
        raise ValueError(f"Got {len(names)} names for {len(actions)} actions")

    failures: List[Tuple[str, BaseException]] = []
    for index, (name, action) in enumerate(zip(names, actions), start=1):
        try:
            result = action()
        except Exception as e:
            logger.info(f"  → {what}: candidate {index}/{len(actions)} '{name}' failed: {e}")
            failures.append((name, e))
            continue
        if index > 1:
            logger.warning(f"✓ {what} succeeded with fallback candidate {index}: '{name}'")
        else:
            logger.debug(f"✓ {what} succeeded with primary candidate '{name}'")
        return result

    logger.error(f"✗ {what}: all {len(actions)} candidates failed")
    raise AllCandidatesFailed(failures, what)


def retry(action: Callable[[], T], attempts: int = 3, delay: float = 0.5,
          exceptions: Tuple[Type[BaseException], ...] = (Exception,),
          what: str = "operation") -> T:
    """Call action up to attempts times, sleeping delay seconds between failures"""
    if attempts < 1:
        raise ValueError("attempts must be at least 1")
    for attempt in range(1, attempts + 1):
        try:
            return action()
        except exceptions as e:
            if attempt == attempts:
                logger.error(f"{what} failed after {attempts} attempts: {e}")
                raise
            logger.warning(f"{what} attempt {attempt}/{attempts} failed: {e}. Retrying in {delay:g}s...")
            time.sleep(delay)
    raise AssertionError("unreachable")


def retrying(attempts: int = 3, delay: float = 0.5,
             exceptions: Tuple[Type[BaseException], ...] = (Exception,)):
    """Decorator form of retry()"""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return retry(lambda: func(*args, **kwargs), attempts, delay, exceptions, func.__name__)
        return wrapper

    return decorator


class ResilientElement:
    """
    One logical element reachable through several locators.

    Candidates are tried in declaration order; for each, the locator is
    resolved, the wait policy applied and the full action performed before
    the next candidate is considered.
    """

    def __init__(self, page: Page, name: str, candidates: Sequence[str],
                 timeout: float = DEFAULT_TIMEOUT,
                 retry_attempts: int = 1, retry_delay: float = 0.0):
        if not candidates:
            raise ValueError(f"Resilient element '{name}' needs at least one locator")
        self.page = page
        self.name = name
        self.candidates = list(candidates)
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self.last_used: Optional[str] = None
        self.stats: Dict[str, Dict[str, int]] = {
            candidate: {'attempts': 0, 'successes': 0, 'failures': 0} for candidate in self.candidates
        }

    @property
    def healed(self) -> bool:
        """True when the last successful operation needed a fallback locator"""
        return self.last_used is not None and self.last_used != self.candidates[0]

    def _run_candidate(self, locator: str, action: str, func: Callable[[Locator], T],
                       wait_type: WaitType) -> T:
        stats = self.stats[locator]
        stats['attempts'] += 1
        try:
            handle = locate(self.page, locator)
            wait_for(handle, wait_type, self.timeout, self.name, locator)
            result = perform(self.name, locator, action, lambda: func(handle))
        except Exception:
            stats['failures'] += 1
            raise
        stats['successes'] += 1
        self.last_used = locator
        return result

    def _attempt(self, action: str, func: Callable[[Locator], T],
                 wait_type: WaitType = WaitType.VISIBLE) -> T:
        def candidate_action(locator: str) -> Callable[[], T]:
            return lambda: retry(
                lambda: self._run_candidate(locator, action, func, wait_type),
                self.retry_attempts, self.retry_delay, what=f"{action} '{self.name}' via {locator}",
            )

        return try_in_order(
            [candidate_action(locator) for locator in self.candidates],
            names=self.candidates,
            what=f"{action} '{self.name}'",
        )

    def click(self):
        self._attempt('click', lambda h: h.click(), WaitType.CLICKABLE)
        return self

    def fill(self, text: str):
        """Set the value in a single fill so a failed candidate never leaves partial text"""
        self._attempt('fill', lambda h: h.fill(text), WaitType.VISIBLE)
        return self

    def select_option(self, label: str):
        self._attempt('select option', lambda h: h.select_option(label=label), WaitType.CLICKABLE)
        return self

    def check(self):
        self._attempt('check', lambda h: h.check(), WaitType.CLICKABLE)
        return self

    def get_text(self) -> str:
        return self._attempt('get text', lambda h: h.inner_text(), WaitType.VISIBLE).strip()

    def wait_visible(self) -> str:
        """Wait until some candidate is visible; returns the locator that matched"""
        self._attempt('wait for', lambda h: None, WaitType.VISIBLE)
        return self.last_used

    def locate(self) -> Locator:
        """Locator of the first candidate that is present on the page"""
        return self._attempt('locate', lambda h: h, WaitType.PRESENT)

    def is_displayed(self) -> bool:
        """Check every candidate without waiting; True if any is visible"""
        for locator in self.candidates:
            handle = locate(self.page, locator)
            if check_state(self.name, f"is displayed via {locator}", handle.is_visible):
                return True
        return False

    def get_stats(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'last_used': self.last_used,
            'healed': self.healed,
            'candidates': {locator: dict(counts) for locator, counts in self.stats.items()},
        }
