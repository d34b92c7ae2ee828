"""Tests for the JSON-file order repository, using a temporary directory."""

import json
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from ordercapture.domain.exceptions import EntityNotFoundError, ValidationError
from ordercapture.domain.model.order import Order, OrderKind, OrderStatus
from ordercapture.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def repo(tmp_path):
    return JsonOrderRepository(tmp_path / "store" / "carts.json")


def _cart() -> Order:
    cart = Order.create_cart(NOW, "C1", "Alice", "B1", "Downtown", now=NOW)
    cart.add_item("P1", "Pale Ale", 5, "20.00")
    cart.add_item("P2", "Stout", 15, "5.00")
    return cart


class TestJsonOrderRepository:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "sales.json"
        JsonOrderRepository(path)
        assert json.loads(path.read_text()) == []

    def test_round_trip_keeps_header_and_pricing(self, repo):
        cart = _cart()
        repo.create(cart)

        loaded = repo.get_by_id(cart.id)

        assert loaded is not cart
        assert loaded.customer_name == "Alice"
        assert loaded.created_at == NOW
        assert [i.id for i in loaded.items] == [i.id for i in cart.items]
        assert loaded.items[0].discount == cart.items[0].discount
        assert loaded.total == cart.total
        assert loaded.pending_events == ()

    def test_stores_inputs_not_derived_totals(self, repo, tmp_path):
        repo.create(_cart())
        [raw] = json.loads((tmp_path / "store" / "carts.json").read_text())
        assert raw["items"][0]["unit_price"] == "20.00"
        assert "total" not in raw["items"][0]

    def test_missing_order(self, repo):
        assert repo.get_by_id(uuid4()) is None

    def test_duplicate_create_rejected(self, repo):
        cart = _cart()
        repo.create(cart)
        with pytest.raises(ValidationError, match="already exists"):
            repo.create(cart)

    def test_update_persists_changes(self, repo):
        cart = _cart()
        repo.create(cart)
        cart.remove_item(cart.items[0].id)
        cart.cancel()
        repo.update(cart)

        loaded = repo.get_by_id(cart.id)
        assert loaded.status is OrderStatus.CANCELLED
        assert loaded.item_count == 1

    def test_update_unknown_order(self, repo):
        with pytest.raises(EntityNotFoundError):
            repo.update(_cart())

    def test_list_all_filters_by_kind(self, repo):
        cart = _cart()
        sale = Order.create_sale("S-1", NOW, "C2", "Bob", "B1", "Downtown", now=NOW)
        repo.create(cart)
        repo.create(sale)

        assert len(repo.list_all()) == 2
        assert [o.id for o in repo.list_all(OrderKind.SALE)] == [sale.id]
        assert repo.list_all(OrderKind.SALE)[0].sale_number == "S-1"


class TestSaleNumberLookup:

    def _sale(self, number: str) -> Order:
        return Order.create_sale(number, NOW, "C1", "Alice", "B1", "Downtown", now=NOW)

    def test_finds_stored_sale(self, repo):
        sale = self._sale("S-1")
        repo.create(self._sale("S-0"))
        repo.create(sale)
        found = repo.get_by_sale_number("S-1")
        assert found.id == sale.id

    def test_unknown_number(self, repo):
        repo.create(self._sale("S-1"))
        assert repo.get_by_sale_number("S-2") is None

    def test_duplicate_number_rejected(self, repo):
        repo.create(self._sale("S-1"))
        with pytest.raises(ValidationError) as exc_info:
            repo.create(self._sale("S-1"))
        assert exc_info.value.fields == ["sale_number"]
        assert len(repo.list_all()) == 1
