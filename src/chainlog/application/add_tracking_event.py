"""Application service: Add Tracking Event use case (single and batch).

Steps, all inside one transaction:
1. Prove the actor's identity.
2. Load the product; it must exist and be ACTIVE.
3. Resolve the actor's capability (owner or authorized actor).
4. Validate the event fields.
5. Allocate the next ledger-wide event id and persist the event.
6. Update the forward, per-type and per-actor indexes.

A batch runs the same steps per item in a single transaction, so one bad
item leaves the store, the indexes and the event sequence untouched.
"""

from __future__ import annotations

import structlog

from chainlog.application.dto import EventSpec
from chainlog.application.notifications import publish_committed
from chainlog.domain.exceptions import DomainException
from chainlog.domain.model import validation as v
from chainlog.domain.model.tracking_event import TrackingEvent
from chainlog.domain.port.clock import Clock
from chainlog.domain.port.event_publisher import TRACKING_EVENT, EventPublisher
from chainlog.domain.port.identity_verifier import IdentityVerifier
from chainlog.domain.repository.ledger_store import LedgerStore
from chainlog.domain.repository.ledger_transaction import atomic
from chainlog.domain.service.authorization_gate import AuthorizationGate
from chainlog.domain.service.event_indexer import EventIndexer

logger = structlog.get_logger()


class AddTrackingEventHandler:

    def __init__(
        self,
        store: LedgerStore,
        identity: IdentityVerifier,
        clock: Clock,
        publisher: EventPublisher,
    ) -> None:
        self._store = store
        self._gate = AuthorizationGate(identity)
        self._clock = clock
        self._publisher = publisher

    def handle(self, actor: str, product_id: str, spec: EventSpec) -> int:
        """Append one event and return its id."""
        return self.handle_batch(actor, product_id, [spec])[0]

    def handle_batch(self, actor: str, product_id: str, specs: list[EventSpec]) -> list[int]:
        """Append every event in *specs*, in order, or none of them."""
        try:
            with atomic(self._store) as tx:
                self._gate.require_can_append(tx, actor, product_id)
                v.max_items(specs, v.MAX_BATCH_SIZE, "batch")

                for spec in specs:
                    TrackingEvent.validate_fields(spec.event_type, spec.metadata)

                now = self._clock.now()
                events: list[TrackingEvent] = []
                for spec in specs:
                    event = TrackingEvent(
                        event_id=tx.next_event_id(),
                        product_id=product_id,
                        actor=actor,
                        timestamp=now,
                        event_type=spec.event_type,
                        location=spec.location,
                        data_hash=spec.data_hash,
                        note=spec.note,
                        metadata=dict(spec.metadata),
                    )
                    tx.put_event(event)
                    EventIndexer.index(tx, event)
                    events.append(event)
        except DomainException as exc:
            logger.warning(
                "event.append_rejected",
                product_id=product_id,
                actor=actor,
                error=exc.code,
                reason=str(exc),
            )
            raise

        for event in events:
            logger.info(
                "event.appended",
                event_id=event.event_id,
                product_id=product_id,
                event_type=event.event_type,
            )
            publish_committed(
                self._publisher,
                TRACKING_EVENT,
                {
                    "event_id": event.event_id,
                    "product_id": product_id,
                    "actor": actor,
                    "event_type": event.event_type,
                    "location": event.location,
                    "timestamp": event.timestamp,
                    "data_hash": str(event.data_hash),
                },
            )
        return [event.event_id for event in events]
