"""Integration tests for EventQueryHandler: lookups, counts and pages."""

import pytest

from chainlog.domain.exceptions import EventNotFoundError, ProductNotFoundError, ValidationError
from chainlog.domain.model.tracking_event import EventFilter
from tests.harness import COFFEE_ID, Ledger


def _setup():
    """COFFEE with a mixed history, one hour apart.

    ids 1..6: HARVEST/farmer @Farm, SHIP/carrier @Port, SHIP/carrier @Sea,
    RECEIVE/roaster @Roastery, SHIP/carrier @Port, ROAST/roaster @Roastery
    """
    ledger = Ledger()
    ledger.register("farmer")
    for actor in ("carrier", "roaster"):
        ledger.granter.handle("farmer", COFFEE_ID, actor)
    rows = [
        ("farmer", "HARVEST", "Farm"),
        ("carrier", "SHIP", "Port"),
        ("carrier", "SHIP", "Sea"),
        ("roaster", "RECEIVE", "Roastery"),
        ("carrier", "SHIP", "Port"),
        ("roaster", "ROAST", "Roastery"),
    ]
    for actor, event_type, location in rows:
        ledger.track(actor, event_type=event_type, location=location)
        ledger.clock.advance(3600)
    return ledger


def _ids(page):
    return [e.event_id for e in page.items]


class TestLookups:

    def test_get_event(self):
        ledger = _setup()
        assert ledger.events.get_event(4).event_type == "RECEIVE"

    def test_get_unknown_event(self):
        with pytest.raises(EventNotFoundError, match="#99"):
            _setup().events.get_event(99)

    def test_event_ids_in_append_order(self):
        assert _setup().events.event_ids(COFFEE_ID) == [1, 2, 3, 4, 5, 6]

    def test_unknown_product_fails_every_query(self):
        events = _setup().events
        for call in (
            lambda: events.event_ids("GHOST"),
            lambda: events.event_count("GHOST"),
            lambda: events.by_product("GHOST", 0, 10),
            lambda: events.by_type("GHOST", "SHIP", 0, 10),
            lambda: events.filtered("GHOST", EventFilter(location="Port"), 0, 10),
        ):
            with pytest.raises(ProductNotFoundError):
                call()


class TestCounts:

    def test_counts(self):
        events = _setup().events
        assert events.event_count(COFFEE_ID) == 6
        assert events.event_count_by_type(COFFEE_ID, "SHIP") == 3
        assert events.event_count_by_type(COFFEE_ID, "PACKAGE") == 0
        assert events.event_count_by_actor(COFFEE_ID, "roaster") == 2

    def test_per_type_counts_sum_to_total(self):
        events = _setup().events
        types = {e.event_type for e in events.by_product(COFFEE_ID, 0, 100).items}
        assert sum(events.event_count_by_type(COFFEE_ID, t) for t in types) == 6


class TestPages:

    def test_by_product(self):
        page = _setup().events.by_product(COFFEE_ID, 2, 2)
        assert _ids(page) == [3, 4]
        assert page.total_count == 6
        assert page.has_more

    def test_recent_is_newest_first(self):
        page = _setup().events.recent(COFFEE_ID, 0, 3)
        assert _ids(page) == [6, 5, 4]
        assert page.has_more

    def test_recent_tail(self):
        page = _setup().events.recent(COFFEE_ID, 4, 10)
        assert _ids(page) == [2, 1]
        assert not page.has_more

    def test_by_type(self):
        page = _setup().events.by_type(COFFEE_ID, "SHIP", 0, 10)
        assert _ids(page) == [2, 3, 5]
        assert page.total_count == 3
        assert not page.has_more

    def test_by_actor(self):
        page = _setup().events.by_actor(COFFEE_ID, "roaster", 1, 10)
        assert _ids(page) == [6]
        assert page.total_count == 2

    def test_empty_history(self):
        ledger = Ledger()
        ledger.register("farmer")
        page = ledger.events.by_product(COFFEE_ID, 0, 10)
        assert page.items == []
        assert page.total_count == 0
        assert not page.has_more

    def test_zero_limit(self):
        page = _setup().events.by_product(COFFEE_ID, 0, 0)
        assert page.items == []
        assert page.total_count == 6
        assert page.has_more

    def test_negative_offset(self):
        with pytest.raises(ValidationError):
            _setup().events.by_product(COFFEE_ID, -1, 10)


class TestTimeRange:

    def test_inclusive_bounds(self):
        ledger = _setup()
        t1 = ledger.events.get_event(2).timestamp
        t2 = ledger.events.get_event(4).timestamp
        page = ledger.events.by_time_range(COFFEE_ID, t1, t2, 0, 10)
        assert _ids(page) == [2, 3, 4]

    def test_paginates_matches(self):
        ledger = _setup()
        start = ledger.events.get_event(2).timestamp
        page = ledger.events.by_time_range(COFFEE_ID, start, start + 10 * 3600, 1, 2)
        assert _ids(page) == [3, 4]
        assert page.total_count == 5
        assert page.has_more

    def test_nothing_in_range(self):
        page = _setup().events.by_time_range(COFFEE_ID, 1, 2, 0, 10)
        assert page.items == []
        assert page.total_count == 0


class TestFiltered:

    def test_empty_filter_is_everything(self):
        page = _setup().events.filtered(COFFEE_ID, EventFilter(), 0, 100)
        assert _ids(page) == [1, 2, 3, 4, 5, 6]

    def test_type_only_matches_by_type(self):
        events = _setup().events
        assert _ids(events.filtered(COFFEE_ID, EventFilter(event_type="SHIP"), 1, 1)) == [3]

    def test_location_only(self):
        page = _setup().events.filtered(COFFEE_ID, EventFilter(location="Roastery"), 0, 10)
        assert _ids(page) == [4, 6]

    def test_type_and_location(self):
        page = _setup().events.filtered(
            COFFEE_ID, EventFilter(event_type="SHIP", location="Port"), 0, 10
        )
        assert _ids(page) == [2, 5]
        assert page.total_count == 2

    def test_type_and_time(self):
        ledger = _setup()
        start = ledger.events.get_event(3).timestamp
        page = ledger.events.filtered(
            COFFEE_ID, EventFilter(event_type="SHIP", start_time=start), 0, 10
        )
        assert _ids(page) == [3, 5]
