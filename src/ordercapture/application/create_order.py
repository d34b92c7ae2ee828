"""Application service: Create Order use case.

Validates the whole command up front so the caller sees every bad field
at once, then lets the Order aggregate build and price the lines.
Works for both carts and sales.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ordercapture.application.dto import LineItemSpec, OrderDTO, order_to_dto
from ordercapture.application.events import EventPublisher, publish_all
from ordercapture.domain.exceptions import FieldError
from ordercapture.domain.model.order import Order, OrderKind
from ordercapture.domain.model.value_objects import Money
from ordercapture.domain.repository.order_repository import OrderRepository
from ordercapture.domain.validation import (
    ValidationResult,
    validate_line_item,
    validate_order_header,
)

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repo = order_repo
        self._publisher = publisher

    def handle(
        self,
        kind: OrderKind,
        customer_id: str,
        customer_name: str,
        branch_id: str,
        branch_name: str,
        items: list[LineItemSpec],
        created_at: datetime | None = None,
        sale_number: str | None = None,
    ) -> OrderDTO:
        """Create a new cart or sale.

        Steps:
        1. Validate header and every item spec (fail with all errors).
        2. Create the aggregate and add each line (prices are snapshots).
        3. Persist, then publish the queued events.
        """
        created_at = created_at or datetime.now(timezone.utc)

        self._validate(
            kind, customer_id, customer_name, branch_id, branch_name,
            items, created_at, sale_number,
        ).raise_if_invalid(f"Cannot create {kind.value}")

        order = Order.create(
            kind=kind,
            created_at=created_at,
            customer_id=customer_id,
            customer_name=customer_name,
            branch_id=branch_id,
            branch_name=branch_name,
            sale_number=sale_number,
        )
        for spec in items:
            order.add_item(
                spec.product_id,
                spec.product_name,
                spec.quantity,
                Money.of(spec.unit_price),
            )

        self._order_repo.create(order)
        publish_all(order, self._publisher)

        logger.info(
            "Created %s %s for customer %s with %d item(s), total %s",
            kind.value, order.id, order.customer_id, order.item_count, order.total,
        )
        return order_to_dto(order)

    def _validate(
        self,
        kind: OrderKind,
        customer_id: str,
        customer_name: str,
        branch_id: str,
        branch_name: str,
        items: list[LineItemSpec],
        created_at: datetime,
        sale_number: str | None,
    ) -> ValidationResult:
        result = validate_order_header(
            kind=kind,
            customer_id=customer_id,
            customer_name=customer_name,
            branch_id=branch_id,
            branch_name=branch_name,
            created_at=created_at,
            sale_number=sale_number,
        )
        if (
            kind is OrderKind.SALE
            and sale_number
            and self._order_repo.get_by_sale_number(sale_number) is not None
        ):
            result = result + ValidationResult(
                (FieldError("sale_number", f"Sale number {sale_number} is already in use."),)
            )
        if kind is OrderKind.SALE and not items:
            result = result + ValidationResult(
                (FieldError("items", "At least one sale item is required."),)
            )
        for index, spec in enumerate(items):
            result = result + validate_line_item(
                spec.product_id,
                spec.product_name,
                spec.quantity,
                spec.unit_price,
                field_prefix=f"items[{index}].",
            )
        return result
