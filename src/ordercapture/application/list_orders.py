"""Application service: List Orders use case (query)."""

from __future__ import annotations

from ordercapture.application.dto import OrderPageDTO, order_to_dto
from ordercapture.domain.model.order import OrderKind
from ordercapture.domain.repository.order_repository import OrderRepository

DEFAULT_PAGE_SIZE = 10


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        kind: OrderKind | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> OrderPageDTO:
        """Return one page of stored orders, oldest first.

        A page below 1 is read as the first page; a page size below 1
        falls back to the default.  A page past the end is empty but
        still reports the total count.
        """
        page = page if page >= 1 else 1
        page_size = page_size if page_size >= 1 else DEFAULT_PAGE_SIZE

        orders = sorted(self._order_repo.list_all(kind), key=lambda o: o.created_at)
        start = (page - 1) * page_size
        return OrderPageDTO(
            items=[order_to_dto(order) for order in orders[start:start + page_size]],
            total_count=len(orders),
            page=page,
            page_size=page_size,
        )
