"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repository and
the logging publisher but keep everything in memory. No file I/O.
"""

from __future__ import annotations

from uuid import UUID

from ordercapture.application.events import EventPublisher
from ordercapture.domain.model.events import DomainEvent
from ordercapture.domain.model.order import Order, OrderKind
from ordercapture.domain.repository.order_repository import OrderRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[UUID, Order] = {}
        self.updates = 0
        for order in orders or []:
            self._store[order.id] = order

    def create(self, order: Order) -> Order:
        self._store[order.id] = order
        return order

    def get_by_id(self, order_id: UUID) -> Order | None:
        return self._store.get(order_id)

    def get_by_sale_number(self, sale_number: str) -> Order | None:
        for order in self._store.values():
            if order.kind is OrderKind.SALE and order.sale_number == sale_number:
                return order
        return None

    def update(self, order: Order) -> None:
        self._store[order.id] = order
        self.updates += 1

    def list_all(self, kind: OrderKind | None = None) -> list[Order]:
        return [o for o in self._store.values() if kind is None or o.kind is kind]


class FakeEventPublisher(EventPublisher):

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self.events.append(event)

    @property
    def topics(self) -> list[str]:
        return [event.topic for event in self.events]
