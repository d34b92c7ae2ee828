"""Integration tests for the add-item, remove-item and cancel use cases."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest

from ordercapture.application.add_item import AddItemHandler
from ordercapture.application.cancel_order import CancelOrderHandler
from ordercapture.application.dto import LineItemSpec
from ordercapture.application.remove_item import RemoveItemHandler
from ordercapture.domain.exceptions import (
    EntityNotFoundError,
    ItemNotFoundError,
    ModificationNotAllowedError,
    ValidationError,
)
from ordercapture.domain.model.order import Order, OrderStatus
from tests.fakes import FakeEventPublisher, FakeOrderRepository

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _stored_cart() -> tuple[Order, FakeOrderRepository, FakeEventPublisher]:
    """A persisted cart whose creation event has already been published."""
    cart = Order.create_cart(NOW, "C1", "Alice", "B1", "Downtown", now=NOW)
    cart.pull_events()
    return cart, FakeOrderRepository([cart]), FakeEventPublisher()


class TestAddItem:

    def test_adds_priced_line(self):
        cart, repo, publisher = _stored_cart()
        dto = AddItemHandler(repo, publisher).handle(
            cart.id, LineItemSpec("P1", "Pale Ale", 5, "20.00")
        )
        assert dto.discount == "10%"
        assert dto.total == "$90.00"
        assert repo.get_by_id(cart.id).item_count == 1
        assert repo.updates == 1
        assert publisher.topics == ["cart.modified"]

    def test_unknown_order(self):
        _, repo, publisher = _stored_cart()
        with pytest.raises(EntityNotFoundError, match="not found"):
            AddItemHandler(repo, publisher).handle(
                uuid4(), LineItemSpec("P1", "Pale Ale", 1, "1.00")
            )

    def test_invalid_spec_is_rejected_before_lookup(self):
        _, repo, publisher = _stored_cart()
        with pytest.raises(ValidationError) as exc_info:
            AddItemHandler(repo, publisher).handle(
                uuid4(), LineItemSpec("P1", "", 25, "1.00")
            )
        assert exc_info.value.fields == ["product_name", "quantity"]

    def test_cancelled_order_rejects_item(self):
        cart, repo, publisher = _stored_cart()
        cart.cancel()
        cart.pull_events()
        with pytest.raises(ModificationNotAllowedError):
            AddItemHandler(repo, publisher).handle(
                cart.id, LineItemSpec("P1", "Pale Ale", 1, "1.00")
            )
        assert repo.updates == 0
        assert publisher.events == []


class TestRemoveItem:

    def test_removes_line_and_returns_new_total(self):
        cart, repo, publisher = _stored_cart()
        first = cart.add_item("P1", "Pale Ale", 5, "20.00")
        cart.add_item("P2", "Stout", 15, "5.00")
        cart.pull_events()

        dto = RemoveItemHandler(repo, publisher).handle(cart.id, first.id)

        assert dto.total == "$60.00"
        assert [i.product_id for i in dto.items] == ["P2"]
        assert publisher.topics == ["cart.item_removed", "cart.modified"]
        assert publisher.events[0].line_item_id == first.id

    def test_unknown_item(self):
        cart, repo, publisher = _stored_cart()
        with pytest.raises(ItemNotFoundError):
            RemoveItemHandler(repo, publisher).handle(cart.id, uuid4())
        assert repo.updates == 0

    def test_unknown_order(self):
        _, repo, publisher = _stored_cart()
        with pytest.raises(EntityNotFoundError):
            RemoveItemHandler(repo, publisher).handle(uuid4(), uuid4())


class TestCancelOrder:

    def test_cancels_and_publishes(self):
        cart, repo, publisher = _stored_cart()
        dto = CancelOrderHandler(repo, publisher).handle(cart.id)
        assert dto.status == "CANCELLED"
        assert repo.get_by_id(UUID(dto.id)).status is OrderStatus.CANCELLED
        assert publisher.topics == ["cart.cancelled"]

    def test_second_cancel_publishes_nothing(self):
        cart, repo, publisher = _stored_cart()
        handler = CancelOrderHandler(repo, publisher)
        handler.handle(cart.id)
        dto = handler.handle(cart.id)
        assert dto.status == "CANCELLED"
        assert publisher.topics == ["cart.cancelled"]

    def test_unknown_order(self):
        _, repo, publisher = _stored_cart()
        with pytest.raises(EntityNotFoundError):
            CancelOrderHandler(repo, publisher).handle(uuid4())
