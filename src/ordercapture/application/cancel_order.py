"""Application service: Cancel Order use case.

Cancelling is final.  A cancelled cart or sale stays on record; it just
cannot be modified any more.  Cancelling twice is harmless and publishes
nothing the second time.
"""

from __future__ import annotations

import logging
from uuid import UUID

from ordercapture.application.dto import OrderDTO, order_to_dto
from ordercapture.application.events import EventPublisher, publish_all
from ordercapture.domain.exceptions import EntityNotFoundError
from ordercapture.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(self, order_id: UUID) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        order.cancel()
        self._order_repo.update(order)
        events = publish_all(order, self._publisher)

        if events:
            logger.info(
                "Cancelled %s %s (total %s)", order.kind.value, order.id, order.total
            )
        else:
            logger.info("%s %s was already cancelled", order.kind.label, order.id)
        return order_to_dto(order)
