"""
Locator resolution: prefixed locator strings -> Playwright selectors
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .errors import InvalidParameter
from .models import PLACEHOLDER_PATTERN, count_placeholders


class SelectorKind(Enum):
    CSS = 'css'
    XPATH = 'xpath'


@dataclass(frozen=True)
class NativeSelector:
    """A selector in a form the browser driver understands"""
    kind: SelectorKind
    value: str

    @property
    def selector(self) -> str:
        """Playwright selector string with an explicit engine"""
        return f"{self.kind.value}={self.value}"

    def __str__(self) -> str:
        return self.selector


def _css_id(value: str) -> str:
    return f"#{value}"


def _css_class(value: str) -> str:
    return f".{value}"


def _css_name(value: str) -> str:
    return f"[name='{value}']"


# Checked in order, always anchored at the start of the locator
PREFIXES: List[Tuple[str, str]] = [
    ('xpath=', 'xpath'),
    ('css=', 'css'),
    ('id=', 'id'),
    ('class=', 'class'),
    ('name=', 'name'),
]

_BUILDERS = {
    'xpath': lambda value: NativeSelector(SelectorKind.XPATH, value),
    'css': lambda value: NativeSelector(SelectorKind.CSS, value),
    'id': lambda value: NativeSelector(SelectorKind.CSS, _css_id(value)),
    'class': lambda value: NativeSelector(SelectorKind.CSS, _css_class(value)),
    'name': lambda value: NativeSelector(SelectorKind.CSS, _css_name(value)),
}


def split_locator(locator: str) -> Tuple[str, str]:
    """Return (strategy, value); unprefixed locators are CSS"""
    for prefix, strategy in PREFIXES:
        if locator.startswith(prefix):
            return strategy, locator[len(prefix):]
    return 'css', locator


def resolve(locator: str) -> NativeSelector:
    """
    Turn a locator string into a driver-native selector.

    ``xpath=``, ``css=``, ``id=``, ``class=`` and ``name=`` are recognised only
    as a prefix, so CSS such as ``[name='x=y']`` is passed through untouched.
    """
    strategy, value = split_locator(locator)
    return _BUILDERS[strategy](value)


def strategy_of(locator: str) -> str:
    return split_locator(locator)[0]


def strip_prefix(locator: str) -> str:
    return split_locator(locator)[1]


def substitute(template: str, parameter) -> str:
    """
    Fill the single placeholder of a dynamic locator.

    Raises:
        InvalidParameter: parameter is empty, or template has no placeholder
    """
    if parameter is None or not str(parameter).strip():
        raise InvalidParameter(
            f"Dynamic element parameter must not be empty (locator: {template})"
        )
    if count_placeholders(template) == 0:
        raise InvalidParameter(f"Locator has no placeholder to fill: {template}")
    # Function replacement keeps backslashes in the parameter literal
    return PLACEHOLDER_PATTERN.sub(lambda _: str(parameter), template, count=1)
