"""Quantity-tiered discount policy.

The tier table is fixed: buying more units of the same product on one line
earns a bigger discount, up to the per-line ceiling of 20 units.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ordercapture.domain.exceptions import InvalidQuantityError

MIN_ITEM_QUANTITY = 1
MAX_ITEM_QUANTITY = 20


@dataclass(frozen=True)
class DiscountTier:
    min_quantity: int
    max_quantity: int
    rate: Decimal

    def covers(self, quantity: int) -> bool:
        return self.min_quantity <= quantity <= self.max_quantity


DISCOUNT_TIERS: tuple[DiscountTier, ...] = (
    DiscountTier(1, 3, Decimal("0.00")),
    DiscountTier(4, 9, Decimal("0.10")),
    DiscountTier(10, MAX_ITEM_QUANTITY, Decimal("0.20")),
)


def discount_for(quantity: int) -> Decimal:
    """Return the discount fraction for a line of *quantity* units.

    Raises InvalidQuantityError for anything outside 1..20, even when the
    caller has already checked.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantityError(
            f"Quantity must be an integer, got {type(quantity).__name__}"
        )
    for tier in DISCOUNT_TIERS:
        if tier.covers(quantity):
            return tier.rate
    if quantity > MAX_ITEM_QUANTITY:
        raise InvalidQuantityError(
            f"Quantity cannot exceed {MAX_ITEM_QUANTITY}, got {quantity}"
        )
    raise InvalidQuantityError(
        f"Quantity must be at least {MIN_ITEM_QUANTITY}, got {quantity}"
    )
