"""Tests for offset pagination."""

import pytest

from catalog_api.catalog.pagination import (
    PageRequest,
    PageResult,
    paginate,
    total_pages,
)
from catalog_api.domain.exceptions import ValidationError


class TestPaginate:
    """Tests for paginate."""

    def test_third_page_of_twenty_five(self) -> None:
        """10 per page, 25 items, page 3 -> skip 20, limit 10, 3 pages."""
        window = paginate(total_items=25, page=3, items_per_page=10)

        assert window.skip == 20
        assert window.limit == 10
        assert window.total_pages == 3

    def test_first_page(self) -> None:
        window = paginate(total_items=5, page=1, items_per_page=10)
        assert window.skip == 0
        assert window.total_pages == 1

    def test_page_beyond_end_is_not_clamped(self) -> None:
        """Out-of-range pages are allowed and keep the real page count."""
        window = paginate(total_items=25, page=100, items_per_page=10)

        assert window.skip == 990
        assert window.skip >= 25
        assert window.total_pages == 3

    @pytest.mark.parametrize(
        "total,per_page,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 10, 3), (7, 1, 7)],
    )
    def test_total_pages_is_ceiling(self, total, per_page, expected) -> None:
        assert total_pages(total, per_page) == expected

    @pytest.mark.parametrize("per_page", [0, -1])
    def test_non_positive_page_size_rejected(self, per_page) -> None:
        with pytest.raises(ValidationError) as exc_info:
            paginate(total_items=10, page=1, items_per_page=per_page)
        assert exc_info.value.field == "itemsPerPage"

    def test_non_positive_page_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            paginate(total_items=10, page=0, items_per_page=10)
        assert exc_info.value.field == "page"


class TestPageRequest:
    """Tests for PageRequest validation."""

    def test_valid_request(self) -> None:
        PageRequest(page=2, items_per_page=20).validate(max_items_per_page=100)

    def test_page_size_above_maximum_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PageRequest(page=1, items_per_page=101).validate(max_items_per_page=100)
        assert "100" in exc_info.value.message

    def test_boolean_page_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PageRequest(page=True, items_per_page=10).validate()


class TestPageResult:
    """Tests for PageResult helpers."""

    def test_navigation_flags(self) -> None:
        middle = PageResult(total_items=25, total_pages=3, current_page=2, items_per_page=10)
        assert middle.has_next
        assert middle.has_prev

        last = PageResult(total_items=25, total_pages=3, current_page=3, items_per_page=10)
        assert not last.has_next
