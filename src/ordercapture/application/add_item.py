"""Application service: Add Item use case."""

from __future__ import annotations

import logging
from uuid import UUID

from ordercapture.application.dto import LineItemDTO, LineItemSpec, line_item_to_dto
from ordercapture.application.events import EventPublisher, publish_all
from ordercapture.domain.exceptions import EntityNotFoundError
from ordercapture.domain.model.value_objects import Money
from ordercapture.domain.repository.order_repository import OrderRepository
from ordercapture.domain.validation import validate_line_item

logger = logging.getLogger(__name__)


class AddItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(self, order_id: UUID, spec: LineItemSpec) -> LineItemDTO:
        validate_line_item(
            spec.product_id, spec.product_name, spec.quantity, spec.unit_price
        ).raise_if_invalid("Cannot add item")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        # Aggregate re-checks status and quantity on its own
        item = order.add_item(
            spec.product_id,
            spec.product_name,
            spec.quantity,
            Money.of(spec.unit_price),
        )
        self._order_repo.update(order)
        publish_all(order, self._publisher)

        logger.info(
            "Added item %s (%s x%d) to %s %s",
            item.id, item.product_name, item.quantity.value, order.kind.value, order.id,
        )
        return line_item_to_dto(item)
