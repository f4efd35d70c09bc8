"""Tests for date token resolution."""

from datetime import date, datetime

import pytest

from page_objects.dates import DateTokenResolver, days_between, format_date


class TestFormatting:
    """Java-style patterns rendered at Friday 2024-01-05 13:05:09."""

    MOMENT = datetime(2024, 1, 5, 13, 5, 9, 250000)

    @pytest.mark.parametrize("pattern, expected", [
        ("yyyy-MM-dd", "2024-01-05"),
        ("dd/MM/yyyy", "05/01/2024"),
        ("yyyy-MM-dd HH:mm:ss", "2024-01-05 13:05:09"),
        ("yyyy-MM-dd'T'HH:mm:ss", "2024-01-05T13:05:09"),
        ("dd.MM.yy", "05.01.24"),
        ("dd MMM yyyy", "05 Jan 2024"),
        ("d/M/yyyy", "5/1/2024"),
        ("EEE, dd MMM", "Fri, 05 Jan"),
        ("EEEE d MMMM", "Friday 5 January"),
        ("hh:mm a", "01:05 PM"),
        ("HH:mm:ss.SSS", "13:05:09.250"),
        ("h 'o''clock'", "1 o'clock"),
        ("''yy", "'24"),
    ])
    def test_pattern_letters(self, pattern, expected):
        assert format_date(self.MOMENT, pattern) == expected

    def test_date_renders_midnight(self):
        assert format_date(date(2024, 1, 5), "yyyy-MM-dd HH:mm hh a") == "2024-01-05 00:00 12 AM"

    @pytest.mark.parametrize("pattern", ["Q", "yyyy-ww", "dd MMM G"])
    def test_unsupported_letter_raises(self, pattern):
        with pytest.raises(ValueError, match="Unsupported date pattern letter"):
            format_date(self.MOMENT, pattern)

    def test_format_date(self):
        assert format_date(date(2024, 3, 9), "MM/dd/yyyy") == "03/09/2024"
        assert format_date(None) == ""

    def test_days_between(self):
        assert days_between(date(2024, 1, 1), date(2024, 3, 1)) == 60


class TestDateTokenResolver:
    """The fixed clock is Monday 2024-01-01 09:30:00."""

    @pytest.mark.parametrize("token, expected", [
        ("<TODAY>", "2024-01-01"),
        ("<YESTERDAY>", "2023-12-31"),
        ("<TOMORROW>", "2024-01-02"),
        ("<PLUS_3_DAYS>", "2024-01-04"),
        ("<MINUS_1_DAYS>", "2023-12-31"),
        ("<PLUS_2_WEEKS>", "2024-01-15"),
        ("<MINUS_1_WEEKS>", "2023-12-25"),
        ("<PLUS_1_MONTHS>", "2024-02-01"),
        ("<MINUS_2_MONTHS>", "2023-11-01"),
        ("<PLUS_1_YEARS>", "2025-01-01"),
        ("<MINUS_1_YEARS>", "2023-01-01"),
        ("<NEXT_FRIDAY>", "2024-01-05"),
        ("<NEXT_SUNDAY>", "2024-01-07"),
    ])
    def test_tokens(self, date_resolver, token, expected):
        assert date_resolver.resolve(token) == expected

    def test_next_weekday_on_same_day_is_a_week_later(self, date_resolver):
        assert date_resolver.resolve("<NEXT_MONDAY>") == "2024-01-08"

    def test_next_friday_from_friday(self):
        resolver = DateTokenResolver(clock=lambda: datetime(2024, 1, 5, 12, 0))
        assert resolver.resolve("<NEXT_FRIDAY>") == "2024-01-12"

    def test_month_end_is_clamped(self):
        resolver = DateTokenResolver(clock=lambda: datetime(2024, 1, 31))
        assert resolver.resolve("<PLUS_1_MONTHS>") == "2024-02-29"

    def test_now_uses_datetime_format(self, date_resolver):
        assert date_resolver.resolve("<NOW>", "dd/MM/yyyy") == "2024-01-01 09:30:00"

    def test_custom_pattern(self, date_resolver):
        assert date_resolver.resolve("<TODAY>", "dd/MM/yyyy") == "01/01/2024"

    def test_tokens_inside_text(self, date_resolver):
        text = "Check in <TODAY>, check out <PLUS_3_DAYS>"
        assert date_resolver.resolve(text) == "Check in 2024-01-01, check out 2024-01-04"

    @pytest.mark.parametrize("text", [None, "", "   ", "Da Nang", "<UNKNOWN_TOKEN>", "a < b"])
    def test_text_without_known_tokens_is_unchanged(self, date_resolver, text):
        assert date_resolver.resolve(text) == text
