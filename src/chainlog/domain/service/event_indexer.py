"""Domain service: Secondary Index Manager.

Maintains the derived structures that sit next to each stored event:

- the product's forward index (event ids in append order)
- a dense, 1-based positional index per (product, event type)
- the same per (product, actor)

The event records are the source of truth.  Indexes are only ever
written inside the transaction that persists the event, so the two can
never disagree after a commit.
"""

from __future__ import annotations

from chainlog.domain.model.page import window
from chainlog.domain.model.tracking_event import TrackingEvent
from chainlog.domain.repository.ledger_transaction import LedgerTransaction, LedgerView


class EventIndexer:

    # --- Write side -----------------------------------------------------------

    @staticmethod
    def index(tx: LedgerTransaction, event: TrackingEvent) -> None:
        pid = event.product_id

        ids = tx.event_ids(pid)
        ids.append(event.event_id)
        tx.put_event_ids(pid, ids)

        type_pos = tx.type_count(pid, event.event_type) + 1
        tx.set_type_count(pid, event.event_type, type_pos)
        tx.set_type_index_at(pid, event.event_type, type_pos, event.event_id)

        actor_pos = tx.actor_count(pid, event.actor) + 1
        tx.set_actor_count(pid, event.actor, actor_pos)
        tx.set_actor_index_at(pid, event.actor, actor_pos, event.event_id)

    # --- Read side ------------------------------------------------------------

    @staticmethod
    def ids_by_type(
        view: LedgerView, product_id: str, event_type: str, offset: int, limit: int
    ) -> tuple[list[int], int]:
        """Event ids for one page of a type, touching only that page's slots."""
        total = view.type_count(product_id, event_type)
        ids = []
        for i in window(total, offset, limit):
            event_id = view.type_index_at(product_id, event_type, i + 1)
            if event_id is not None:
                ids.append(event_id)
        return ids, total

    @staticmethod
    def ids_by_actor(
        view: LedgerView, product_id: str, actor: str, offset: int, limit: int
    ) -> tuple[list[int], int]:
        total = view.actor_count(product_id, actor)
        ids = []
        for i in window(total, offset, limit):
            event_id = view.actor_index_at(product_id, actor, i + 1)
            if event_id is not None:
                ids.append(event_id)
        return ids, total
