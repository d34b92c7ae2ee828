"""Unit tests for the quantity-tier discount table."""

from decimal import Decimal

import pytest

from ordercapture.domain.exceptions import InvalidQuantityError
from ordercapture.domain.model.discount_policy import DISCOUNT_TIERS, discount_for


class TestDiscountTiers:

    @pytest.mark.parametrize("quantity", [1, 2, 3])
    def test_small_lines_get_no_discount(self, quantity):
        assert discount_for(quantity) == Decimal("0")

    @pytest.mark.parametrize("quantity", range(4, 10))
    def test_four_to_nine_get_ten_percent(self, quantity):
        assert discount_for(quantity) == Decimal("0.10")

    @pytest.mark.parametrize("quantity", range(10, 21))
    def test_ten_to_twenty_get_twenty_percent(self, quantity):
        assert discount_for(quantity) == Decimal("0.20")

    def test_boundaries(self):
        assert discount_for(3) == Decimal("0")
        assert discount_for(4) == Decimal("0.10")
        assert discount_for(9) == Decimal("0.10")
        assert discount_for(10) == Decimal("0.20")
        assert discount_for(20) == Decimal("0.20")

    def test_tiers_are_contiguous(self):
        for lower, upper in zip(DISCOUNT_TIERS, DISCOUNT_TIERS[1:]):
            assert upper.min_quantity == lower.max_quantity + 1


class TestDiscountRejections:

    @pytest.mark.parametrize("quantity", [21, 100])
    def test_above_ceiling_rejected(self, quantity):
        with pytest.raises(InvalidQuantityError, match="cannot exceed 20"):
            discount_for(quantity)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_below_one_rejected(self, quantity):
        with pytest.raises(InvalidQuantityError, match="at least 1"):
            discount_for(quantity)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidQuantityError, match="integer"):
            discount_for(Decimal("4"))

    def test_error_names_quantity_field(self):
        with pytest.raises(InvalidQuantityError) as exc_info:
            discount_for(21)
        assert exc_info.value.fields == ["quantity"]
