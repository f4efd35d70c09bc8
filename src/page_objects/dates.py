"""
Date tokens for test data: <TODAY>, <NEXT_FRIDAY>, <PLUS_3_DAYS> ...
"""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Union

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

# Formats use Java-style patterns, as found in the page and test data files
DEFAULT_DATE_FORMAT = 'yyyy-MM-dd'
DEFAULT_DATETIME_FORMAT = 'yyyy-MM-dd HH:mm:ss'
US_DATE_FORMAT = 'MM/dd/yyyy'
EU_DATE_FORMAT = 'dd/MM/yyyy'
ISO_DATE_FORMAT = 'yyyy-MM-dd'
ISO_DATETIME_FORMAT = "yyyy-MM-dd'T'HH:mm:ss"

WEEKDAYS = ['MONDAY', 'TUESDAY', 'WEDNESDAY', 'THURSDAY', 'FRIDAY', 'SATURDAY', 'SUNDAY']

NEXT_WEEKDAY_PATTERN = re.compile(r'<NEXT_(%s)>' % '|'.join(WEEKDAYS))
OFFSET_PATTERN = re.compile(r'<(PLUS|MINUS)_(\d+)_(DAY|WEEK|MONTH|YEAR)S?>')

# Quoted literal ('T', with '' standing for a quote) or a run of one pattern letter
_PATTERN_FIELDS = re.compile(r"'(?:[^']|'')*'|([A-Za-z])\1*")

MONTHS = ['January', 'February', 'March', 'April', 'May', 'June', 'July',
          'August', 'September', 'October', 'November', 'December']
DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']

_UNITS = {
    'DAY': lambda n: relativedelta(days=n),
    'WEEK': lambda n: relativedelta(weeks=n),
    'MONTH': lambda n: relativedelta(months=n),
    'YEAR': lambda n: relativedelta(years=n),
}


def _number(value: int, width: int) -> str:
    return str(value).zfill(width)


def _text(names, index: int, width: int) -> str:
    name = names[index]
    return name if width >= 4 else name[:3]


def _year(value: datetime, width: int) -> str:
    if width == 2:
        return _number(value.year % 100, 2)
    return _number(value.year, width)


def _month(value: datetime, width: int) -> str:
    if width >= 3:
        return _text(MONTHS, value.month - 1, width)
    return _number(value.month, width)


def _hour12(value: datetime, width: int) -> str:
    return _number(value.hour % 12 or 12, width)


def _fraction(value: datetime, width: int) -> str:
    return str(value.microsecond).zfill(6)[:width].ljust(width, '0')


_FIELDS = {
    'y': _year,
    'M': _month,
    'd': lambda value, width: _number(value.day, width),
    'E': lambda value, width: _text(DAY_NAMES, value.weekday(), width),
    'H': lambda value, width: _number(value.hour, width),
    'h': _hour12,
    'm': lambda value, width: _number(value.minute, width),
    's': lambda value, width: _number(value.second, width),
    'S': _fraction,
    'a': lambda value, width: 'AM' if value.hour < 12 else 'PM',
}


def format_date(value: Optional[Union[date, datetime]], pattern: str = DEFAULT_DATE_FORMAT) -> str:
    """
    Render value with a Java-style pattern (dd MMM yyyy, EEE d/M/yy, hh:mm a ...).

    Supported letters are y, M, d, E, H, h, m, s, S and a. Month and day
    names are English. A date renders its time fields as midnight.

    Raises:
        ValueError: the pattern uses any other letter
    """
    if value is None:
        return ''
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)

    def render(match: re.Match) -> str:
        field = match.group(0)
        if field.startswith("'"):
            return field[1:-1].replace("''", "'") or "'"
        letter = match.group(1)
        if letter not in _FIELDS:
            raise ValueError(f"Unsupported date pattern letter '{letter}' in '{pattern}'")
        return _FIELDS[letter](value, len(field))

    return _PATTERN_FIELDS.sub(render, pattern)


def days_between(start: date, end: date) -> int:
    return (end - start).days


class DateTokenResolver:
    """
    Replaces date tokens in strings relative to an injectable clock.

    Unknown ``<...>`` sequences are left untouched, test data may contain
    angle brackets of its own.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or datetime.now

    def today(self) -> date:
        return self.clock().date()

    def next_weekday(self, weekday: str) -> date:
        """Next occurrence of weekday, strictly after today"""
        today = self.today()
        target = WEEKDAYS.index(weekday.upper())
        days_ahead = (target - today.weekday()) % 7 or 7
        return today + timedelta(days=days_ahead)

    def offset(self, sign: str, amount: int, unit: str) -> date:
        delta = _UNITS[unit](amount)
        today = self.today()
        return today + delta if sign == 'PLUS' else today - delta

    def resolve(self, text: Optional[str], pattern: str = DEFAULT_DATE_FORMAT) -> Optional[str]:
        if text is None or not text.strip() or '<' not in text:
            return text

        now = self.clock()
        today = now.date()
        resolved = text
        resolved = resolved.replace('<TODAY>', format_date(today, pattern))
        resolved = resolved.replace('<NOW>', format_date(now, DEFAULT_DATETIME_FORMAT))
        resolved = resolved.replace('<YESTERDAY>', format_date(today - timedelta(days=1), pattern))
        resolved = resolved.replace('<TOMORROW>', format_date(today + timedelta(days=1), pattern))

        resolved = NEXT_WEEKDAY_PATTERN.sub(
            lambda m: format_date(self.next_weekday(m.group(1)), pattern), resolved
        )
        resolved = OFFSET_PATTERN.sub(
            lambda m: format_date(self.offset(m.group(1), int(m.group(2)), m.group(3)), pattern), resolved
        )

        if resolved != text:
            logger.debug(f"Resolved date tokens: '{text}' -> '{resolved}'")
        return resolved


_default_resolver = DateTokenResolver()


def resolve(text: Optional[str], pattern: str = DEFAULT_DATE_FORMAT) -> Optional[str]:
    """Resolve date tokens against the system clock"""
    return _default_resolver.resolve(text, pattern)
