"""Unit tests for pagination utilities."""

import pytest

from app.crosscutting.pagination import Page, PageRequest, Pagination, total_pages_for

pytestmark = pytest.mark.unit


class TestTotalPages:
    """Test total_pages_for."""

    @pytest.mark.parametrize(
        "total,limit,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (45, 20, 3)],
    )
    def test_ceil_division(self, total, limit, expected):
        assert total_pages_for(total, limit) == expected


class TestPageRequest:
    """Test page/limit normalization."""

    def test_defaults(self):
        window = PageRequest.clamped(None, None, default_limit=10)

        assert window.page == 1
        assert window.limit == 10
        assert window.offset == 0

    def test_out_of_range_values_are_clamped(self):
        assert PageRequest.clamped(0, 0, default_limit=10) == PageRequest(page=1, limit=1)
        assert PageRequest.clamped(-3, 500, default_limit=10) == PageRequest(
            page=1, limit=100
        )

    def test_offset(self):
        assert PageRequest(page=3, limit=20).offset == 40


class TestPageSerialization:
    def test_pagination_uses_camel_case_total_pages(self):
        page = Page[int](data=[1, 2], pagination=Pagination.build(PageRequest(1, 2), 5))

        dumped = page.model_dump(by_alias=True)

        assert dumped == {
            "data": [1, 2],
            "pagination": {"page": 1, "limit": 2, "total": 5, "totalPages": 3},
        }
