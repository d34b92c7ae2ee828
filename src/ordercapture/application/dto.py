"""Input specs and display-ready outputs for the application handlers.

Outputs hold pre-formatted strings ($ amounts, discount percentages) so
the CLI never touches Money or LineItem directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from ordercapture.domain.model.line_item import LineItem
from ordercapture.domain.model.order import Order


@dataclass(frozen=True)
class LineItemSpec:
    """Input: one line as requested by the caller."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # as typed, e.g. "19.90"


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a single line item as displayed to the user."""

    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    discount: str  # e.g. "10%"
    total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete cart or sale as displayed to the user."""

    id: str
    kind: str
    sale_number: str | None
    status: str
    customer_id: str
    customer_name: str
    branch_id: str
    branch_name: str
    items: list[LineItemDTO]
    gross_total: str
    total_discount: str
    total: str
    created_at: str


@dataclass(frozen=True)
class OrderPageDTO:
    """Output: one page of orders plus the numbers needed to page on."""

    items: list[OrderDTO]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return -(-self.total_count // self.page_size)


@dataclass(frozen=True)
class DiscountLineDTO:
    product_name: str
    quantity: int
    unit_price: str
    subtotal: str
    discount: str
    discount_amount: str
    final_amount: str


@dataclass(frozen=True)
class DiscountQuoteDTO:
    """Output: a priced quote that was never stored."""

    lines: list[DiscountLineDTO]
    subtotal: str
    total_discount: str
    final_amount: str


# --- Mapping ------------------------------------------------------------------


def line_item_to_dto(item: LineItem) -> LineItemDTO:
    return LineItemDTO(
        id=str(item.id),
        product_id=item.product_id,
        product_name=item.product_name,
        quantity=item.quantity.value,
        unit_price=str(item.unit_price),
        discount=f"{item.discount_percent}%",
        total=str(item.total),
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=str(order.id),
        kind=order.kind.value,
        sale_number=order.sale_number,
        status=order.status.value,
        customer_id=order.customer_id,
        customer_name=order.customer_name,
        branch_id=order.branch_id,
        branch_name=order.branch_name,
        items=[line_item_to_dto(item) for item in order.items],
        gross_total=str(order.gross_total),
        total_discount=str(order.total_discount),
        total=str(order.total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
