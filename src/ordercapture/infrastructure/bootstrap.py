"""Composition root: builds the concrete repository and publisher from settings.

CLI commands ask this module for their collaborators; nothing else reads
the settings to decide which implementation to use.
"""

from __future__ import annotations

from ordercapture.application.events import (
    EventPublisher,
    LoggingEventPublisher,
    NullEventPublisher,
)
from ordercapture.domain.model.order import OrderKind
from ordercapture.infrastructure.config import get_settings
from ordercapture.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)

_FILE_NAMES = {
    OrderKind.CART: "carts.json",
    OrderKind.SALE: "sales.json",
}


def order_repository(kind: OrderKind) -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().DATA_DIR / _FILE_NAMES[kind])


def event_publisher() -> EventPublisher:
    if get_settings().PUBLISH_EVENTS:
        return LoggingEventPublisher()
    return NullEventPublisher()
