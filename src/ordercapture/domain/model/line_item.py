"""LineItem entity: one priced product line inside a cart or sale."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID, uuid4

from ordercapture.domain.model.discount_policy import discount_for
from ordercapture.domain.model.value_objects import Money, Quantity
from ordercapture.domain.validation import validate_line_item


@dataclass(frozen=True)
class LineItem:
    """A product line with its price locked and its discount worked out.

    Discount and totals are computed once, in ``__post_init__``, and never
    change: there is no way to edit a line.  Changing a quantity means
    removing the line and adding a new one.

    New lines come from ``Order.add_item()``, which calls ``create()``.  The
    plain constructor is what repositories use to reconstitute stored lines;
    it runs the same checks, so an invalid line cannot exist either way.
    """

    id: UUID
    product_id: str
    product_name: str  # snapshot, not re-synced with the catalog
    quantity: Quantity
    unit_price: Money  # locked when the line is added

    discount: Decimal = field(init=False)
    gross_total: Money = field(init=False)
    discount_amount: Money = field(init=False)
    total: Money = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.quantity, Quantity):
            object.__setattr__(self, "quantity", Quantity(self.quantity))

        validate_line_item(
            self.product_id,
            self.product_name,
            self.quantity.value,
            self.unit_price,
        ).raise_if_invalid("Invalid line item")

        if not isinstance(self.unit_price, Money):
            object.__setattr__(self, "unit_price", Money.of(self.unit_price))

        rate = discount_for(self.quantity.value)
        gross = self.unit_price * self.quantity.value
        total = (gross * (Decimal("1") - rate)).quantize()
        gross = gross.quantize()

        object.__setattr__(self, "discount", rate)
        object.__setattr__(self, "gross_total", gross)
        object.__setattr__(self, "total", total)
        object.__setattr__(self, "discount_amount", gross - total)

    @staticmethod
    def create(
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: Money | Decimal | str,
    ) -> LineItem:
        """Build a brand-new line with a fresh identity."""
        return LineItem(
            id=uuid4(),
            product_id=product_id,
            product_name=product_name,
            quantity=Quantity(quantity),
            unit_price=unit_price,
        )

    @property
    def discount_percent(self) -> int:
        return int(self.discount * 100)
