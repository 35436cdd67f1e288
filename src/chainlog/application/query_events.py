"""Application service: tracking-event queries (the Query/Pagination Engine).

Every list query returns a ``Page`` and never fails on an offset past the
end: it just returns an empty page with ``has_more = False``.

Cost per query:

- by product / recent: one read of the forward index, then one read per
  event on the page.
- by type / by actor: one read of the count, then one positional slot and
  one event per item on the page; other types and actors are never touched.
- by time range and mixed filters: there is no time index, so these read
  every event of the product before paginating.  Linear in the product's
  event count.
"""

from __future__ import annotations

from chainlog.domain.exceptions import EventNotFoundError
from chainlog.domain.model.page import Page, check_window, slice_page
from chainlog.domain.model.tracking_event import EventFilter, TrackingEvent
from chainlog.domain.repository.ledger_store import LedgerStore
from chainlog.domain.repository.ledger_transaction import LedgerView
from chainlog.domain.service.event_indexer import EventIndexer


class EventQueryHandler:

    def __init__(self, store: LedgerStore) -> None:
        self._view = LedgerView(store)

    # --- Lookups --------------------------------------------------------------

    def get_event(self, event_id: int) -> TrackingEvent:
        event = self._view.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def event_ids(self, product_id: str) -> list[int]:
        """The product's full forward index, oldest first."""
        self._view.require_product(product_id)
        return self._view.event_ids(product_id)

    # --- Counts ---------------------------------------------------------------

    def event_count(self, product_id: str) -> int:
        self._view.require_product(product_id)
        return len(self._view.event_ids(product_id))

    def event_count_by_type(self, product_id: str, event_type: str) -> int:
        self._view.require_product(product_id)
        return self._view.type_count(product_id, event_type)

    def event_count_by_actor(self, product_id: str, actor: str) -> int:
        self._view.require_product(product_id)
        return self._view.actor_count(product_id, actor)

    # --- Index-backed pages ---------------------------------------------------

    def by_product(self, product_id: str, offset: int, limit: int) -> Page[TrackingEvent]:
        check_window(offset, limit)
        self._view.require_product(product_id)
        ids, total = slice_page(self._view.event_ids(product_id), offset, limit)
        return Page.build(self._load(ids), offset, total)

    def recent(self, product_id: str, offset: int, limit: int) -> Page[TrackingEvent]:
        """Newest first; *offset* counts back from the latest event."""
        check_window(offset, limit)
        self._view.require_product(product_id)
        all_ids = self._view.event_ids(product_id)
        ids, total = slice_page(all_ids[::-1], offset, limit)
        return Page.build(self._load(ids), offset, total)

    def by_type(self, product_id: str, event_type: str, offset: int, limit: int) -> Page[TrackingEvent]:
        check_window(offset, limit)
        self._view.require_product(product_id)
        ids, total = EventIndexer.ids_by_type(self._view, product_id, event_type, offset, limit)
        return Page.build(self._load(ids), offset, total)

    def by_actor(self, product_id: str, actor: str, offset: int, limit: int) -> Page[TrackingEvent]:
        check_window(offset, limit)
        self._view.require_product(product_id)
        ids, total = EventIndexer.ids_by_actor(self._view, product_id, actor, offset, limit)
        return Page.build(self._load(ids), offset, total)

    # --- Scanning pages -------------------------------------------------------

    def by_time_range(
        self, product_id: str, start_time: int, end_time: int, offset: int, limit: int
    ) -> Page[TrackingEvent]:
        """Events with ``start_time <= timestamp <= end_time``.

        Not index-backed: scans every event of the product.
        """
        return self._scan(
            product_id, EventFilter(start_time=start_time, end_time=end_time), offset, limit
        )

    def filtered(self, product_id: str, event_filter: EventFilter, offset: int, limit: int) -> Page[TrackingEvent]:
        """Composite filter.  Sentinel values leave a dimension open.

        A filter on type alone is served from the type index, an empty
        filter from the forward index; any other mix is a full scan.
        """
        only_type = event_filter.constrains_type and not (
            event_filter.constrains_time or event_filter.constrains_location
        )
        if only_type:
            return self.by_type(product_id, event_filter.event_type, offset, limit)
        if event_filter == EventFilter():
            return self.by_product(product_id, offset, limit)
        return self._scan(product_id, event_filter, offset, limit)

    # --- Helpers --------------------------------------------------------------

    def _scan(self, product_id: str, event_filter: EventFilter, offset: int, limit: int) -> Page[TrackingEvent]:
        check_window(offset, limit)
        self._view.require_product(product_id)
        matching = [
            event
            for event in self._load(self._view.event_ids(product_id))
            if event_filter.matches(event)
        ]
        items, total = slice_page(matching, offset, limit)
        return Page.build(items, offset, total)

    def _load(self, ids: list[int]) -> list[TrackingEvent]:
        events = []
        for event_id in ids:
            event = self._view.get_event(event_id)
            if event is None:
                # An indexed id with no record means the store was edited by hand.
                raise EventNotFoundError(event_id)
            events.append(event)
        return events
