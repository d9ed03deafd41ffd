"""Tests for pagination helpers."""

import pytest

from sessionvault.core.pagination import DEFAULT_PAGE, DEFAULT_PER_PAGE, PageResult, page_offset, parse_page_number


class TestParsePageNumber:
    """Tests for parse_page_number function."""

    def test_none_returns_default(self):
        assert parse_page_number(None, DEFAULT_PAGE) == 1
        assert parse_page_number(None, DEFAULT_PER_PAGE) == 25

    def test_int_passes_through(self):
        assert parse_page_number(3, DEFAULT_PAGE) == 3
        assert parse_page_number(10, DEFAULT_PER_PAGE) == 10

    def test_numeric_string_is_parsed(self):
        """Test that numeric strings sent by form-based clients are accepted."""
        assert parse_page_number("2", DEFAULT_PAGE) == 2
        assert parse_page_number(" 50 ", DEFAULT_PER_PAGE) == 50

    @pytest.mark.parametrize("value", ["abc", "", "2.5", "-3", [], {}, 2.5])
    def test_non_numeric_returns_default(self, value):
        assert parse_page_number(value, DEFAULT_PER_PAGE) == DEFAULT_PER_PAGE

    @pytest.mark.parametrize("value", [0, -1, "0"])
    def test_values_below_one_return_default(self, value):
        assert parse_page_number(value, DEFAULT_PAGE) == DEFAULT_PAGE

    def test_booleans_are_not_numbers(self):
        assert parse_page_number(True, DEFAULT_PER_PAGE) == DEFAULT_PER_PAGE

    def test_whole_float_is_accepted(self):
        assert parse_page_number(4.0, DEFAULT_PAGE) == 4


class TestPageOffset:
    """Tests for page_offset function."""

    def test_first_page_has_no_offset(self):
        assert page_offset(1, 25) == 0

    def test_second_page_of_ten_skips_ten(self):
        """Page 2 with 10 per page starts at the 11th record."""
        assert page_offset(2, 10) == 10

    def test_offset_scales_with_page(self):
        assert page_offset(5, 25) == 100


class TestPageResult:
    def test_serializes_rows_and_count(self):
        result = PageResult[int](rows=[1, 2], count=7)
        assert result.model_dump() == {"rows": [1, 2], "count": 7}
