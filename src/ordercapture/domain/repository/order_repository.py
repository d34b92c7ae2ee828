"""Abstract repository for the Order aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  The aggregate itself never calls it; application
handlers load, mutate and store orders through it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from ordercapture.domain.model.order import Order, OrderKind


class OrderRepository(ABC):

    @abstractmethod
    def create(self, order: Order) -> Order:
        """Persist a brand-new order and return it."""

    @abstractmethod
    def get_by_id(self, order_id: UUID) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_sale_number(self, sale_number: str) -> Order | None:
        """Return the sale carrying *sale_number*, or None.

        Sale numbers are unique across stored sales.
        """

    @abstractmethod
    def update(self, order: Order) -> None:
        """Persist changes to an existing order."""

    @abstractmethod
    def list_all(self, kind: OrderKind | None = None) -> list[Order]:
        """Return every stored order, optionally of a single kind."""
