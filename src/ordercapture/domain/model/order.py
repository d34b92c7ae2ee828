"""Order aggregate: the consistency boundary for a cart or sale.

One aggregate class serves both carts and sales: the rules are identical
and only the labels differ.  The Order owns its line items, guards the
ACTIVE -> CANCELLED lifecycle and queues domain events for the caller.
"""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from datetime import datetime, timezone
from typing import Iterable
from uuid import UUID, uuid4

from ordercapture.domain.exceptions import ItemNotFoundError, ModificationNotAllowedError
from ordercapture.domain.model.enums import OrderKind, OrderStatus
from ordercapture.domain.model.events import (
    DomainEvent,
    ItemRemoved,
    OrderCancelled,
    OrderCreated,
    OrderModified,
)
from ordercapture.domain.model.line_item import LineItem
from ordercapture.domain.model.value_objects import Money
from ordercapture.domain.validation import (
    ValidationResult,
    validate_order,
    validate_order_header,
)

__all__ = ["Order", "OrderKind", "OrderStatus"]


@dataclass(eq=False)
class Order:
    """Aggregate root for carts and sales.

    Use ``Order.create()`` (or ``create_cart()`` / ``create_sale()``) for
    new orders — it validates the header and records ``OrderCreated``.
    The ``__init__`` is intentionally simple so the repository can
    reconstitute persisted orders without re-validating or re-raising
    events.

    Invariants:
    - line items are only added or removed through this class
    - a CANCELLED order never changes again
    - ``total`` always equals the sum of the current line totals
    """

    id: UUID
    kind: OrderKind
    created_at: datetime
    customer_id: str
    customer_name: str  # snapshot
    branch_id: str
    branch_name: str  # snapshot
    status: InitVar[OrderStatus] = OrderStatus.ACTIVE
    sale_number: str | None = None
    line_items: InitVar[Iterable[LineItem]] = ()

    _status: OrderStatus = field(init=False, repr=False, default=OrderStatus.ACTIVE)
    _items: list[LineItem] = field(init=False, repr=False, default_factory=list)
    _events: list[DomainEvent] = field(init=False, repr=False, default_factory=list)

    def __post_init__(self, status: OrderStatus, line_items: Iterable[LineItem]) -> None:
        self._status = status
        self._items = list(line_items)

    # --- Factories (used for NEW orders only) ---------------------------------

    @staticmethod
    def create(
        kind: OrderKind,
        created_at: datetime,
        customer_id: str,
        customer_name: str,
        branch_id: str,
        branch_name: str,
        sale_number: str | None = None,
        now: datetime | None = None,
    ) -> Order:
        """Create a new, empty order, enforcing the header rules.

        Raises ValidationError listing every failing field.
        """
        validate_order_header(
            kind=kind,
            customer_id=customer_id,
            customer_name=customer_name,
            branch_id=branch_id,
            branch_name=branch_name,
            created_at=created_at,
            sale_number=sale_number,
            now=now,
        ).raise_if_invalid(f"Cannot create {kind.value}")

        order = Order(
            id=uuid4(),
            kind=kind,
            created_at=created_at,
            customer_id=customer_id,
            customer_name=customer_name,
            branch_id=branch_id,
            branch_name=branch_name,
            sale_number=sale_number if kind is OrderKind.SALE else None,
        )
        order._record(OrderCreated)
        return order

    @staticmethod
    def create_cart(
        created_at: datetime,
        customer_id: str,
        customer_name: str,
        branch_id: str,
        branch_name: str,
        now: datetime | None = None,
    ) -> Order:
        return Order.create(
            OrderKind.CART, created_at, customer_id, customer_name,
            branch_id, branch_name, now=now,
        )

    @staticmethod
    def create_sale(
        sale_number: str,
        created_at: datetime,
        customer_id: str,
        customer_name: str,
        branch_id: str,
        branch_name: str,
        now: datetime | None = None,
    ) -> Order:
        return Order.create(
            OrderKind.SALE, created_at, customer_id, customer_name,
            branch_id, branch_name, sale_number=sale_number, now=now,
        )

    # --- Item management ------------------------------------------------------

    def add_item(
        self,
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: Money,
    ) -> LineItem:
        """Price a new line and append it.

        Any LineItem construction failure (e.g. InvalidQuantityError)
        propagates unchanged and leaves the order untouched.
        """
        self._ensure_modifiable()
        item = LineItem.create(product_id, product_name, quantity, unit_price)
        self._items.append(item)
        self._record(OrderModified)
        return item

    def remove_item(self, line_item_id: UUID) -> None:
        self._ensure_modifiable()
        item = self.find_item(line_item_id)
        if item is None:
            raise ItemNotFoundError(
                f"{self.kind.label} item '{line_item_id}' not found"
            )
        self._items.remove(item)
        self._record(ItemRemoved, line_item_id=item.id)
        self._record(OrderModified)

    def find_item(self, line_item_id: UUID) -> LineItem | None:
        for item in self._items:
            if item.id == line_item_id:
                return item
        return None

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition ACTIVE -> CANCELLED.

        Cancelling an already cancelled order does nothing and raises no
        second ``OrderCancelled``.
        """
        if self._status is OrderStatus.CANCELLED:
            return
        self._status = OrderStatus.CANCELLED
        self._record(OrderCancelled)

    # --- Computed properties --------------------------------------------------

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def is_active(self) -> bool:
        return self._status is OrderStatus.ACTIVE

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self._items:
            result = result + item.total
        return result

    @property
    def gross_total(self) -> Money:
        result = Money.zero()
        for item in self._items:
            result = result + item.gross_total
        return result

    @property
    def total_discount(self) -> Money:
        return self.gross_total - self.total

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity.value for item in self._items)

    # --- Validation & events --------------------------------------------------

    def validate(self, now: datetime | None = None) -> ValidationResult:
        """Report structural problems without raising."""
        return validate_order(self, now=now)

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    def pull_events(self) -> list[DomainEvent]:
        """Return queued events in emission order and clear the queue."""
        events = list(self._events)
        self._events.clear()
        return events

    # --- Internal helpers -----------------------------------------------------

    def _ensure_modifiable(self) -> None:
        if self._status is OrderStatus.CANCELLED:
            raise ModificationNotAllowedError(
                f"Cannot add or remove items from a cancelled {self.kind.value}"
            )

    def _record(self, event_type: type[DomainEvent], **extra: object) -> None:
        self._events.append(
            event_type(
                order_id=self.id,
                kind=self.kind,
                occurred_at=datetime.now(timezone.utc),
                **extra,
            )
        )


# Assigned after the dataclass is built: a property in the class body would
# replace the ``status`` InitVar default.
Order.status = property(
    lambda self: self._status,
    doc="ACTIVE until ``cancel()``; read-only so a cancelled order stays cancelled.",
)
