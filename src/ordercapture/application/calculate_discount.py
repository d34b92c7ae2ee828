"""Application service: Calculate Discount use case (query).

Prices a prospective set of lines with the tiered discount so a caller
can preview subtotal, discount and final amount.  Nothing is stored and
no events are raised.
"""

from __future__ import annotations

from ordercapture.application.dto import DiscountLineDTO, DiscountQuoteDTO, LineItemSpec
from ordercapture.domain.exceptions import FieldError
from ordercapture.domain.model.line_item import LineItem
from ordercapture.domain.model.value_objects import Money
from ordercapture.domain.validation import ValidationResult, validate_line_item


class CalculateDiscountHandler:

    def handle(self, items: list[LineItemSpec]) -> DiscountQuoteDTO:
        result = ValidationResult()
        if not items:
            result = ValidationResult((FieldError("items", "At least one product is required."),))
        for index, spec in enumerate(items):
            result = result + validate_line_item(
                spec.product_id,
                spec.product_name,
                spec.quantity,
                spec.unit_price,
                field_prefix=f"items[{index}].",
            )
        result.raise_if_invalid("Cannot calculate discount")

        lines = [
            LineItem.create(spec.product_id, spec.product_name, spec.quantity, Money.of(spec.unit_price))
            for spec in items
        ]

        subtotal = Money.zero()
        final = Money.zero()
        for line in lines:
            subtotal = subtotal + line.gross_total
            final = final + line.total

        return DiscountQuoteDTO(
            lines=[
                DiscountLineDTO(
                    product_name=line.product_name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    subtotal=str(line.gross_total),
                    discount=f"{line.discount_percent}%",
                    discount_amount=str(line.discount_amount),
                    final_amount=str(line.total),
                )
                for line in lines
            ],
            subtotal=str(subtotal),
            total_discount=str(subtotal - final),
            final_amount=str(final),
        )
