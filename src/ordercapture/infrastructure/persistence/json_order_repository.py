"""OrderRepository backed by a single JSON file per order kind.

Only the inputs of each line are written (product snapshot, quantity and
unit price).  Discount and totals are worked out again by ``LineItem``
when an order is loaded, so a stored file can never disagree with the
pricing rules.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any
from uuid import UUID

from ordercapture.domain.exceptions import EntityNotFoundError, FieldError, ValidationError
from ordercapture.domain.model.line_item import LineItem
from ordercapture.domain.model.order import Order, OrderKind, OrderStatus
from ordercapture.domain.model.value_objects import Money, Quantity
from ordercapture.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class JsonOrderRepository(OrderRepository):

    def __init__(self, path: Path) -> None:
        self._path = path
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._write([])

    def create(self, order: Order) -> Order:
        records = self._read()
        if self._index_of(records, order.id) is not None:
            raise ValidationError(f"Order {order.id} already exists")
        if order.sale_number is not None and self.get_by_sale_number(order.sale_number) is not None:
            raise ValidationError(
                f"Sale number {order.sale_number} is already in use",
                [FieldError("sale_number", "Sale number is already in use.")],
            )
        records.append(_order_record(order))
        self._write(records)
        logger.debug("Stored new %s %s in %s", order.kind.value, order.id, self._path)
        return order

    def get_by_id(self, order_id: UUID) -> Order | None:
        records = self._read()
        index = self._index_of(records, order_id)
        return None if index is None else _order_from_record(records[index])

    def get_by_sale_number(self, sale_number: str) -> Order | None:
        for record in self._read():
            if record["kind"] == OrderKind.SALE.value and record.get("sale_number") == sale_number:
                return _order_from_record(record)
        return None

    def update(self, order: Order) -> None:
        records = self._read()
        index = self._index_of(records, order.id)
        if index is None:
            raise EntityNotFoundError(f"Order {order.id} not found")
        records[index] = _order_record(order)
        self._write(records)

    def list_all(self, kind: OrderKind | None = None) -> list[Order]:
        return [
            _order_from_record(record)
            for record in self._read()
            if kind is None or record["kind"] == kind.value
        ]

    @staticmethod
    def _index_of(records: list[Record], order_id: UUID) -> int | None:
        key = str(order_id)
        for index, record in enumerate(records):
            if record["id"] == key:
                return index
        return None

    def _read(self) -> list[Record]:
        with self._path.open(encoding="utf-8") as fh:
            return json.load(fh)

    def _write(self, records: list[Record]) -> None:
        # Replace in one step so a crash mid-write never truncates the store
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(records, fh, indent=2)
            fh.write("\n")
        os.replace(tmp, self._path)


def _order_record(order: Order) -> Record:
    return {
        "id": str(order.id),
        "kind": order.kind.value,
        "sale_number": order.sale_number,
        "status": order.status.value,
        "created_at": order.created_at.isoformat(),
        "customer": {"id": order.customer_id, "name": order.customer_name},
        "branch": {"id": order.branch_id, "name": order.branch_name},
        "items": [_item_record(item) for item in order.items],
    }


def _item_record(item: LineItem) -> Record:
    return {
        "id": str(item.id),
        "product_id": item.product_id,
        "product_name": item.product_name,
        "quantity": item.quantity.value,
        "unit_price": str(item.unit_price.amount),
        "currency": item.unit_price.currency,
    }


def _order_from_record(record: Record) -> Order:
    return Order(
        id=UUID(record["id"]),
        kind=OrderKind(record["kind"]),
        created_at=datetime.fromisoformat(record["created_at"]),
        customer_id=record["customer"]["id"],
        customer_name=record["customer"]["name"],
        branch_id=record["branch"]["id"],
        branch_name=record["branch"]["name"],
        status=OrderStatus(record["status"]),
        sale_number=record.get("sale_number"),
        line_items=[_item_from_record(raw) for raw in record["items"]],
    )


def _item_from_record(record: Record) -> LineItem:
    return LineItem(
        id=UUID(record["id"]),
        product_id=record["product_id"],
        product_name=record["product_name"],
        quantity=Quantity(record["quantity"]),
        unit_price=Money(Decimal(record["unit_price"]), record.get("currency", "USD")),
    )
