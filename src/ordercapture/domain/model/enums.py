"""Enumerations shared by the order aggregate, its events and validators."""

from __future__ import annotations

from enum import Enum


class OrderKind(Enum):
    """Which flavour of order an aggregate is.

    Carts and sales obey identical rules; the kind only changes labels,
    event topics and whether a sale number is required.
    """

    CART = "cart"
    SALE = "sale"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class OrderStatus(Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
