"""Structural validation, reported rather than raised.

These checks mirror what an API layer wants to show before it calls into
the aggregate: every failing field at once, as ``(field, message)`` pairs.
They never raise.  The entities still enforce their own invariants on every
constructor and mutating call, whether or not anyone ran these first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from ordercapture.domain.exceptions import FieldError, ValidationError
from ordercapture.domain.model.discount_policy import MAX_ITEM_QUANTITY
from ordercapture.domain.model.enums import OrderKind

if TYPE_CHECKING:
    from ordercapture.domain.model.order import Order

MAX_PRODUCT_NAME_LENGTH = 100


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[FieldError, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def messages(self) -> list[str]:
        return [str(error) for error in self.errors]

    def raise_if_invalid(self, summary: str = "Validation failed") -> None:
        if self.errors:
            details = "; ".join(self.messages())
            raise ValidationError(f"{summary}: {details}", self.errors)

    def __add__(self, other: ValidationResult) -> ValidationResult:
        return ValidationResult(self.errors + other.errors)


def _blank(value: Any) -> bool:
    if value is None:
        return True
    return not str(value).strip()


def validate_order_header(
    kind: OrderKind,
    customer_id: str | None,
    customer_name: str | None,
    branch_id: str | None,
    branch_name: str | None,
    created_at: datetime | None,
    sale_number: str | None = None,
    now: datetime | None = None,
) -> ValidationResult:
    """Check the fields every cart or sale needs at creation time."""
    errors: list[FieldError] = []

    if kind is OrderKind.SALE and _blank(sale_number):
        errors.append(FieldError("sale_number", "Sale number is required."))
    if _blank(customer_id):
        errors.append(FieldError("customer_id", "Customer external ID is required."))
    if _blank(customer_name):
        errors.append(FieldError("customer_name", "Customer name is required."))
    if _blank(branch_id):
        errors.append(FieldError("branch_id", "Branch external ID is required."))
    if _blank(branch_name):
        errors.append(FieldError("branch_name", "Branch name is required."))

    if created_at is None:
        errors.append(FieldError("created_at", "Creation date is required."))
    elif created_at.tzinfo is None:
        errors.append(FieldError("created_at", "Creation date must be timezone-aware."))
    else:
        reference = now or datetime.now(timezone.utc)
        if created_at > reference:
            errors.append(FieldError("created_at", "Creation date cannot be in the future."))

    return ValidationResult(tuple(errors))


def validate_line_item(
    product_id: str | None,
    product_name: str | None,
    quantity: Any,
    unit_price: Any,
    field_prefix: str = "",
) -> ValidationResult:
    """Check one line item's inputs.

    ``unit_price`` may be a ``Money``, a ``Decimal`` or a numeric string.
    """
    errors: list[FieldError] = []

    if _blank(product_id):
        errors.append(FieldError(f"{field_prefix}product_id", "Product external ID is required."))
    if _blank(product_name):
        errors.append(FieldError(f"{field_prefix}product_name", "Product name is required."))
    elif len(str(product_name).strip()) > MAX_PRODUCT_NAME_LENGTH:
        errors.append(
            FieldError(
                f"{field_prefix}product_name",
                f"Product name cannot be longer than {MAX_PRODUCT_NAME_LENGTH} characters.",
            )
        )

    if isinstance(quantity, bool) or not isinstance(quantity, int):
        errors.append(FieldError(f"{field_prefix}quantity", "Quantity must be a whole number."))
    elif quantity <= 0:
        errors.append(FieldError(f"{field_prefix}quantity", "Quantity must be greater than zero."))
    elif quantity > MAX_ITEM_QUANTITY:
        errors.append(
            FieldError(f"{field_prefix}quantity", f"Quantity cannot exceed {MAX_ITEM_QUANTITY}.")
        )

    price = _as_decimal(unit_price)
    if price is None:
        errors.append(FieldError(f"{field_prefix}unit_price", "Unit price must be a number."))
    elif price <= 0:
        errors.append(FieldError(f"{field_prefix}unit_price", "Unit price must be greater than zero."))

    return ValidationResult(tuple(errors))


def validate_order(order: Order, now: datetime | None = None) -> ValidationResult:
    """Report every structural problem with a cart or sale and its items."""
    result = validate_order_header(
        kind=order.kind,
        customer_id=order.customer_id,
        customer_name=order.customer_name,
        branch_id=order.branch_id,
        branch_name=order.branch_name,
        created_at=order.created_at,
        sale_number=order.sale_number,
        now=now,
    )
    for index, item in enumerate(order.items):
        result = result + validate_line_item(
            item.product_id,
            item.product_name,
            item.quantity.value,
            item.unit_price,
            field_prefix=f"items[{index}].",
        )
    return result


def _as_decimal(value: Any) -> Decimal | None:
    amount = getattr(value, "amount", value)
    if isinstance(amount, (bool, float)) or amount is None:
        return None
    try:
        result = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None
