"""Unit tests for the EventIndexer domain service."""

from chainlog.domain.model.tracking_event import TrackingEvent
from chainlog.domain.model.value_objects import ContentHash
from chainlog.domain.repository.ledger_transaction import LedgerView, atomic
from chainlog.domain.service.event_indexer import EventIndexer
from tests.fakes import FakeLedgerStore


def _append(store, *rows):
    """Index (event_type, actor) rows for product P-1 and return their ids."""
    ids = []
    with atomic(store) as tx:
        for event_type, actor in rows:
            event = TrackingEvent(
                event_id=tx.next_event_id(),
                product_id="P-1",
                actor=actor,
                timestamp=100,
                event_type=event_type,
                location="Dock",
                data_hash=ContentHash.zero(),
            )
            tx.put_event(event)
            EventIndexer.index(tx, event)
            ids.append(event.event_id)
    return ids


class TestIndexing:

    def test_forward_index_in_append_order(self):
        store = FakeLedgerStore()
        ids = _append(store, ("HARVEST", "farmer"), ("SHIP", "carrier"), ("SHIP", "carrier"))
        assert LedgerView(store).event_ids("P-1") == ids == [1, 2, 3]

    def test_type_slots_are_dense_and_one_based(self):
        store = FakeLedgerStore()
        _append(store, ("SHIP", "a"), ("HARVEST", "a"), ("SHIP", "b"))
        view = LedgerView(store)
        assert view.type_count("P-1", "SHIP") == 2
        assert view.type_index_at("P-1", "SHIP", 1) == 1
        assert view.type_index_at("P-1", "SHIP", 2) == 3
        assert view.type_index_at("P-1", "SHIP", 0) is None

    def test_actor_slots(self):
        store = FakeLedgerStore()
        _append(store, ("SHIP", "a"), ("HARVEST", "b"), ("SHIP", "a"))
        view = LedgerView(store)
        assert view.actor_count("P-1", "a") == 2
        assert view.actor_index_at("P-1", "a", 2) == 3

    def test_type_totals_sum_to_event_total(self):
        store = FakeLedgerStore()
        rows = [("HARVEST", "f"), ("SHIP", "c"), ("SHIP", "c"), ("RECEIVE", "r"), ("SHIP", "c")]
        _append(store, *rows)
        view = LedgerView(store)
        total = sum(view.type_count("P-1", t) for t in {"HARVEST", "SHIP", "RECEIVE"})
        assert total == len(view.event_ids("P-1")) == 5


class TestIndexReads:

    def test_ids_by_type_window(self):
        store = FakeLedgerStore()
        _append(store, *[("SHIP", "c")] * 10)
        view = LedgerView(store)
        ids, total = EventIndexer.ids_by_type(view, "P-1", "SHIP", 5, 3)
        assert ids == [6, 7, 8]
        assert total == 10

    def test_ids_by_type_past_end(self):
        store = FakeLedgerStore()
        _append(store, *[("SHIP", "c")] * 4)
        ids, total = EventIndexer.ids_by_type(LedgerView(store), "P-1", "SHIP", 20, 5)
        assert ids == []
        assert total == 4

    def test_ids_by_unknown_type(self):
        ids, total = EventIndexer.ids_by_type(LedgerView(FakeLedgerStore()), "P-1", "NONE", 0, 10)
        assert (ids, total) == ([], 0)

    def test_ids_by_actor(self):
        store = FakeLedgerStore()
        _append(store, ("SHIP", "a"), ("SHIP", "b"), ("SHIP", "a"))
        ids, total = EventIndexer.ids_by_actor(LedgerView(store), "P-1", "a", 0, 10)
        assert ids == [1, 3]
        assert total == 2
