"""Read side of orders: a customer's order history with statistics."""

import math
from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.ordering.order.order import OPEN_STATUSES, Order, OrderStatus
from storefront.shared.queries import fetch_all

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


@dataclass
class OrderPage:
    orders: list[Order]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def clamp_paging(page: int | None, limit: int | None) -> tuple[int, int]:
    page = max(page or 1, 1)
    limit = min(max(limit or DEFAULT_PAGE_SIZE, 1), MAX_PAGE_SIZE)
    return page, limit


@storefront.repository(part_of=Order)
class OrderRepository:
    def page_for_customer(
        self,
        customer_id: str,
        statuses: list[str] | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> OrderPage:
        """One page of the customer's orders, newest first."""
        page, limit = clamp_paging(page, limit)
        query = self._dao.query.filter(customer_id=customer_id)
        if statuses:
            query = query.filter(status__in=statuses)

        result = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
        return OrderPage(orders=list(result.items), total=result.total, page=page, limit=limit)

    def all_for_customer(self, customer_id: str) -> list[Order]:
        return fetch_all(self._dao.query.filter(customer_id=customer_id))

    def get_for_customer(self, customer_id: str, order_id: str) -> Order:
        """The order, if it belongs to the customer. Others' orders look missing."""
        try:
            order = self._dao.get(order_id)
        except ObjectNotFoundError:
            raise NotFound("Order not found") from None
        if str(order.customer_id) != str(customer_id):
            raise NotFound("Order not found")
        return order


def order_stats(orders: list[Order]) -> dict:
    """Totals over every order of a customer, regardless of any list filter."""
    by_status = {status.value: 0 for status in OrderStatus}
    for order in orders:
        by_status[order.status] = by_status.get(order.status, 0) + 1

    spent = sum(order.total_amount for order in orders)
    return {
        "total_orders": len(orders),
        "total_spent": round(spent, 2),
        "by_status": by_status,
        "pending_orders": sum(by_status[status.value] for status in OPEN_STATUSES),
        "completed_orders": by_status[OrderStatus.DELIVERED.value],
        "cancelled_orders": by_status[OrderStatus.CANCELLED.value],
    }
