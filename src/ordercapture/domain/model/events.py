"""Domain events raised by the order aggregate.

Events are plain immutable values.  The aggregate only queues them; a
caller drains the queue with ``Order.pull_events()`` after persisting and
hands them to whatever transport it uses.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID

from ordercapture.domain.model.enums import OrderKind


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    order_id: UUID
    kind: OrderKind
    occurred_at: datetime = field(default_factory=_utcnow)

    name: ClassVar[str] = "event"

    @property
    def topic(self) -> str:
        """Routing key, e.g. ``cart.created`` or ``sale.item_removed``."""
        return f"{self.kind.value}.{self.name}"

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly payload."""
        payload: dict[str, Any] = {"topic": self.topic}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, UUID):
                value = str(value)
            payload[f.name] = value
        return payload


@dataclass(frozen=True, kw_only=True)
class OrderCreated(DomainEvent):
    name: ClassVar[str] = "created"


@dataclass(frozen=True, kw_only=True)
class OrderModified(DomainEvent):
    name: ClassVar[str] = "modified"


@dataclass(frozen=True, kw_only=True)
class ItemRemoved(DomainEvent):
    line_item_id: UUID

    name: ClassVar[str] = "item_removed"


@dataclass(frozen=True, kw_only=True)
class OrderCancelled(DomainEvent):
    name: ClassVar[str] = "cancelled"
