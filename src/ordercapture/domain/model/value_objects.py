"""Money and Quantity: the two values every priced line is built from.

Both are frozen and compare by value.  Their constructors reject bad
input outright, so code holding one never has to re-check it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from functools import total_ordering

from ordercapture.domain.exceptions import InvalidQuantityError, ValidationError
from ordercapture.domain.model.discount_policy import MAX_ITEM_QUANTITY, MIN_ITEM_QUANTITY

CENT = Decimal("0.01")


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount in one currency.

    Intermediate results keep full precision; call ``quantize()`` to round
    to cents once a line total is final.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        # bool is an int subclass; True * price is never intended
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def quantize(self) -> Money:
        """Round to whole cents using banker's rounding."""
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_EVEN), self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = "USD") -> Money:
        """Build from a string, int or Decimal.  Floats are refused."""
        if isinstance(amount, float):
            raise ValidationError(f"Invalid money amount: {amount!r} (use a string)")
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0.00"), currency)


@dataclass(frozen=True)
class Quantity:
    """A line quantity between 1 and 20 units.

    Enforces the per-line ceiling so an oversized line can never exist.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidQuantityError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if not MIN_ITEM_QUANTITY <= self.value <= MAX_ITEM_QUANTITY:
            raise InvalidQuantityError(
                f"Quantity must be between {MIN_ITEM_QUANTITY} and "
                f"{MAX_ITEM_QUANTITY}, got {self.value}"
            )

    def __str__(self) -> str:
        return str(self.value)
