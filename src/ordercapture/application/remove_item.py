"""Application service: Remove Item use case."""

from __future__ import annotations

import logging
from uuid import UUID

from ordercapture.application.dto import OrderDTO, order_to_dto
from ordercapture.application.events import EventPublisher, publish_all
from ordercapture.domain.exceptions import EntityNotFoundError
from ordercapture.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class RemoveItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(self, order_id: UUID, line_item_id: UUID) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        order.remove_item(line_item_id)
        self._order_repo.update(order)
        publish_all(order, self._publisher)

        logger.info("Removed item %s from %s %s", line_item_id, order.kind.value, order.id)
        return order_to_dto(order)
