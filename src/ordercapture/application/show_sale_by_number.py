"""Application service: Show Sale By Number use case (query)."""

from __future__ import annotations

from ordercapture.application.dto import OrderDTO, order_to_dto
from ordercapture.domain.exceptions import EntityNotFoundError
from ordercapture.domain.repository.order_repository import OrderRepository


class ShowSaleByNumberHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, sale_number: str) -> OrderDTO:
        sale = self._order_repo.get_by_sale_number(sale_number.strip())
        if sale is None:
            raise EntityNotFoundError(f"Sale with number {sale_number} not found")
        return order_to_dto(sale)
