from types import SimpleNamespace

import pytest

from storefront.ordering.order.queries import MAX_PAGE_SIZE, OrderPage, clamp_paging, order_stats


def _order(status, total):
    return SimpleNamespace(status=status, total_amount=total)


class TestOrderStats:
    def test_counts_and_totals(self):
        stats = order_stats(
            [
                _order("pending", 1000.0),
                _order("processing", 500.5),
                _order("delivered", 2500.0),
                _order("cancelled", 300.0),
            ]
        )

        assert stats["total_orders"] == 4
        assert stats["total_spent"] == 4300.5
        assert stats["pending_orders"] == 2
        assert stats["completed_orders"] == 1
        assert stats["cancelled_orders"] == 1
        assert stats["by_status"]["shipped"] == 0

    def test_no_orders(self):
        stats = order_stats([])
        assert stats["total_orders"] == 0
        assert stats["total_spent"] == 0
        assert set(stats["by_status"]) == {
            "pending",
            "confirmed",
            "processing",
            "shipped",
            "delivered",
            "cancelled",
            "refunded",
        }


class TestPaging:
    @pytest.mark.parametrize(
        "page, limit, expected",
        [
            (None, None, (1, 10)),
            (0, 5, (1, 5)),
            (-3, 0, (1, 10)),
            (2, 500, (2, MAX_PAGE_SIZE)),
        ],
    )
    def test_clamp(self, page, limit, expected):
        assert clamp_paging(page, limit) == expected

    def test_page_flags(self):
        page = OrderPage(orders=[], total=25, page=2, limit=10)
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_prev is True

    def test_last_page(self):
        page = OrderPage(orders=[], total=20, page=2, limit=10)
        assert page.has_next is False

    def test_empty(self):
        page = OrderPage(orders=[], total=0, page=1, limit=10)
        assert page.total_pages == 0
        assert page.has_next is False
        assert page.has_prev is False
