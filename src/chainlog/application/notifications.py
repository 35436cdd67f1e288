"""Best-effort delivery of domain events after a commit."""

from __future__ import annotations

from typing import Any

import structlog

from chainlog.domain.port.event_publisher import EventPublisher

logger = structlog.get_logger()


def publish_committed(publisher: EventPublisher, topic: str, payload: dict[str, Any]) -> None:
    """Publish a notification for a mutation that has already committed.

    The ledger is already consistent at this point, so a failing sink is
    logged and otherwise ignored.
    """
    try:
        publisher.publish(topic, payload)
    except Exception:
        logger.exception("publisher.failed", topic=topic)
