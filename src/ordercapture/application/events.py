"""Hand-off of domain events to a message transport.

Handlers drain ``order.pull_events()`` only after the order has been
stored, then pass each event to an EventPublisher.  The logging publisher
stands in for a real broker.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod

from ordercapture.domain.model.events import DomainEvent
from ordercapture.domain.model.order import Order

logger = logging.getLogger(__name__)


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Deliver one event to its topic."""


class LoggingEventPublisher(EventPublisher):
    """Writes every event to the log instead of a broker."""

    def publish(self, event: DomainEvent) -> None:
        logger.info(
            "Publishing event to topic %s: %s",
            event.topic,
            json.dumps(event.to_dict(), sort_keys=True),
        )


class NullEventPublisher(EventPublisher):
    """Drops events; used when publishing is switched off."""

    def publish(self, event: DomainEvent) -> None:
        logger.debug("Event publishing disabled, dropping %s", event.topic)


def publish_all(order: Order, publisher: EventPublisher) -> list[DomainEvent]:
    """Drain the order's pending events into *publisher*, in order."""
    events = order.pull_events()
    for event in events:
        publisher.publish(event)
    return events
