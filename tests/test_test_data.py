"""Tests for TestDataResolver."""

import json

import pytest

from page_objects.errors import TestDataError
from page_objects.test_data import TestDataResolver

SEARCH_DATA = {
    "TC001": {
        "destination": "Da Nang",
        "checkIn": "<PLUS_3_DAYS>",
        "checkOut": "<NEXT_FRIDAY>",
        "adults": 2,
        "rooms": "1",
        "freeCancellation": "true",
        "filters": ["Pool", "Check in <TODAY>"],
        "guest": {"birthday": "<MINUS_30_YEARS>"},
    },
    "TC002": {"destination": "Hanoi", "adults": "two"},
    "notes": "not a test case",
}


@pytest.fixture
def data_dir(tmp_path):
    directory = tmp_path / "testdata"
    directory.mkdir()
    (directory / "search.json").write_text(json.dumps(SEARCH_DATA), encoding="utf-8")
    return directory


@pytest.fixture
def resolver(data_dir, date_resolver):
    return TestDataResolver(data_dir=data_dir, date_resolver=date_resolver)


class TestTestDataResolver:

    def test_tokens_resolved_on_load(self, resolver):
        case = resolver.get_test_case_data("search.json", "TC001")
        assert case["checkIn"] == "2024-01-04"
        assert case["checkOut"] == "2024-01-05"
        assert case["destination"] == "Da Nang"

    def test_tokens_resolved_in_nested_values(self, resolver):
        case = resolver.get_test_case_data("search.json", "TC001")
        assert case["filters"] == ["Pool", "Check in 2024-01-01"]
        assert case["guest"]["birthday"] == "1994-01-01"

    def test_get_value(self, resolver):
        assert resolver.get_value("search.json", "TC001", "destination") == "Da Nang"
        assert resolver.get_value("search.json", "TC001", "adults") == "2"
        assert resolver.get_value("search.json", "TC001", "children") is None
        assert resolver.get_value("search.json", "TC001", "children", "0") == "0"

    def test_typed_values(self, resolver):
        assert resolver.get_int_value("search.json", "TC001", "rooms") == 1
        assert resolver.get_bool_value("search.json", "TC001", "freeCancellation") is True
        assert resolver.get_bool_value("search.json", "TC002", "destination") is False
        assert resolver.get_int_value("search.json", "TC002", "rooms") is None

    def test_invalid_integer(self, resolver):
        with pytest.raises(TestDataError, match="Invalid integer"):
            resolver.get_int_value("search.json", "TC002", "adults")

    def test_unknown_case(self, resolver):
        with pytest.raises(TestDataError, match="TC999"):
            resolver.get_test_case_data("search.json", "TC999")

    def test_case_must_be_object(self, resolver):
        with pytest.raises(TestDataError, match="not an object"):
            resolver.get_test_case_data("search.json", "notes")

    def test_missing_file(self, resolver):
        with pytest.raises(TestDataError, match="not found"):
            resolver.load_test_data("nothing.json")
        assert not resolver.validate_test_data("nothing.json")

    def test_invalid_json(self, resolver, data_dir):
        (data_dir / "broken.json").write_text("[1, 2", encoding="utf-8")
        assert not resolver.validate_test_data("broken.json")

    def test_available_test_cases(self, resolver):
        assert resolver.available_test_cases("search.json") == ["TC001", "TC002", "notes"]

    def test_cache_lifecycle(self, resolver, data_dir):
        first = resolver.load_test_data("search.json")
        assert resolver.is_cached("search.json")
        assert resolver.load_test_data(data_dir / "search.json") is first

        assert resolver.remove_from_cache("search.json")
        assert not resolver.is_cached("search.json")
        resolver.load_test_data("search.json")
        resolver.clear_cache()
        resolver.clear_cache()
        assert not resolver.is_cached("search.json")
