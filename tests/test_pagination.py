"""Tests for the shared pagination and filter engine."""

import pytest

from storefront.config import settings
from storefront.exceptions import InvalidRequestError
from storefront.services.pagination import (
    effective_limit,
    exact_match,
    filter_items,
    offset_window,
    page_window,
    slice_page,
)


class TestEffectiveLimit:
    def test_default_when_missing(self):
        assert effective_limit(None) == settings.default_page_limit

    def test_passes_through_within_cap(self):
        assert effective_limit(7) == 7

    def test_clamps_to_maximum(self):
        assert effective_limit(settings.max_page_limit + 50) == settings.max_page_limit

    @pytest.mark.parametrize("limit", [0, -3])
    def test_rejects_non_positive(self, limit):
        with pytest.raises(InvalidRequestError) as exc_info:
            effective_limit(limit)
        assert exc_info.value.details == {"limit": limit}


class TestWindows:
    def test_offset_defaults(self):
        window = offset_window(None, None)
        assert window.limit == settings.default_page_limit
        assert window.offset == 0

    def test_negative_offset_rejected(self):
        with pytest.raises(InvalidRequestError):
            offset_window(10, -1)

    def test_page_window_offset(self):
        window = page_window(3, 25)
        assert window.page == 3
        assert window.offset == 50

    def test_page_defaults_to_first(self):
        assert page_window(None, None).page == 1

    def test_page_zero_rejected(self):
        with pytest.raises(InvalidRequestError):
            page_window(0, 10)


class TestFiltering:
    records = [
        {"id": 1, "role": "user"},
        {"id": 2, "role": "admin"},
        {"id": 3, "role": "user"},
    ]

    def test_unset_filter_keeps_everything(self):
        assert filter_items(self.records, [exact_match("role", None)]) == self.records

    def test_exact_match_preserves_order(self):
        result = filter_items(self.records, [exact_match("role", "user")])
        assert [r["id"] for r in result] == [1, 3]

    def test_exact_match_on_attributes(self):
        class Record:
            def __init__(self, flag):
                self.flag = flag

        items = [Record(True), Record(False), Record(True)]
        assert len(filter_items(items, [exact_match("flag", False)])) == 1

    def test_predicates_are_combined(self):
        predicates = [exact_match("role", "user"), exact_match("id", 3)]
        assert filter_items(self.records, predicates) == [{"id": 3, "role": "user"}]


class TestSlicePage:
    def test_total_counts_whole_snapshot(self):
        page = slice_page(list(range(10)), offset=4, limit=3)
        assert page.items == [4, 5, 6]
        assert page.total == 10

    def test_offset_past_end_is_empty(self):
        page = slice_page([1, 2], offset=5, limit=3)
        assert page.items == []
        assert page.total == 2
