"""Port: outbound domain-event notifications.

Publishing is fire-and-forget.  Nothing inside the ledger depends on a
notification being delivered.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

PRODUCT_REGISTERED = "product_registered"
PRODUCT_DEACTIVATED = "product_deactivated"
PRODUCT_REACTIVATED = "product_reactivated"
PRODUCT_TRANSFERRED = "product_transferred"
TRACKING_EVENT = "tracking_event"


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, topic: str, payload: dict[str, Any]) -> None:
        """Deliver one notification.  May raise; callers treat it as best effort."""
