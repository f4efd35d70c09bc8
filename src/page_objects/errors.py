"""
Exception hierarchy for the page object layer
"""

from typing import Any, Dict, List, Optional, Tuple


class PageObjectError(Exception):
    """Base class for every error raised by page_objects"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InvalidPageDefinition(PageObjectError):
    """A page source is malformed or misses required fields"""

    def __init__(self, message: str, source: Optional[str] = None):
        if source:
            message = f"{message} (source: {source})"
        super().__init__(message, {'source': source})
        self.source = source


class ElementNotFound(PageObjectError):
    """A named element is not declared on the loaded page"""

    def __init__(self, element_name: str, page_name: str):
        super().__init__(
            f"Element '{element_name}' not found in page '{page_name}'",
            {'element': element_name, 'page': page_name}
        )
        self.element_name = element_name
        self.page_name = page_name


class ElementTypeMismatch(PageObjectError, TypeError):
    """A dynamic accessor was used on a static element, or the other way round"""

    def __init__(self, element_name: str, page_name: str, requested: str, locator: str):
        super().__init__(
            f"Element '{element_name}' in page '{page_name}' cannot be used as {requested}: "
            f"locator {locator!r} does not fit",
            {'element': element_name, 'page': page_name, 'requested': requested, 'locator': locator}
        )
        self.element_name = element_name
        self.page_name = page_name
        self.requested = requested
        self.locator = locator


class ElementNotReady(PageObjectError):
    """The wait policy timed out before the element reached the expected state"""

    def __init__(self, element_name: str, locator: str, wait_type: str, timeout: float):
        super().__init__(
            f"Element '{element_name}' ({locator}) was not {wait_type} within {timeout:g}s",
            {'element': element_name, 'locator': locator, 'wait_type': wait_type, 'timeout': timeout}
        )
        self.element_name = element_name
        self.locator = locator
        self.wait_type = wait_type
        self.timeout = timeout


class ActionFailed(PageObjectError):
    """An action on a resolved, ready element still raised"""

    def __init__(self, element_name: str, locator: str, action: str, cause: BaseException):
        super().__init__(
            f"Failed to {action} '{element_name}' ({locator}): {cause}",
            {'element': element_name, 'locator': locator, 'action': action}
        )
        self.element_name = element_name
        self.locator = locator
        self.action = action
        self.cause = cause


class AllCandidatesFailed(PageObjectError):
    """
    Every candidate of a fallback chain failed.

    The message lists each attempted candidate together with its own failure
    so a broken locator can be fixed without re-running the test.
    """

    def __init__(self, failures: List[Tuple[str, BaseException]], what: str = "operation"):
        lines = [f"All {len(failures)} candidates failed for {what}:"]
        for index, (name, error) in enumerate(failures, start=1):
            lines.append(f"  {index}. {name} -> {type(error).__name__}: {error}")
        super().__init__("\n".join(lines), {'candidates': [name for name, _ in failures]})
        self.failures = failures
        self.what = what

    @property
    def errors(self) -> List[BaseException]:
        return [error for _, error in self.failures]


class InvalidParameter(PageObjectError, ValueError):
    """A dynamic element was called without a usable runtime parameter"""


class TestDataError(PageObjectError):
    """Test data could not be loaded or a requested value is missing or malformed"""

    __test__ = False
