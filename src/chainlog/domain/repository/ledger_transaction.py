"""Typed access to the ledger records, plus the unit of work that commits them.

``LedgerView`` turns composite keys into domain objects for read paths.
``LedgerTransaction`` extends it with buffered writes: reads see the
transaction's own writes, and nothing reaches the store until ``commit()``
hands the whole buffer to ``LedgerStore.write_batch``.  A transaction
that is abandoned (because a rule was violated half way through a
batch) leaves the store exactly as it was.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from chainlog.domain.exceptions import ProductNotFoundError
from chainlog.domain.model import keys
from chainlog.domain.model.keys import StoreKey
from chainlog.domain.model.product import Product
from chainlog.domain.model.stats import ProductStats
from chainlog.domain.model.tracking_event import TrackingEvent
from chainlog.domain.repository.ledger_store import LedgerStore


class LedgerView:
    """Read-only, typed view over a LedgerStore."""

    def __init__(self, store: LedgerStore) -> None:
        self._store = store

    def _read(self, key: StoreKey) -> Any | None:
        return self._store.get(key)

    # --- Products -------------------------------------------------------------

    def get_product(self, product_id: str) -> Product | None:
        return self._read(keys.product(product_id))

    def has_product(self, product_id: str) -> bool:
        return self.get_product(product_id) is not None

    def require_product(self, product_id: str) -> Product:
        product = self.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    # --- Events ---------------------------------------------------------------

    def get_event(self, event_id: int) -> TrackingEvent | None:
        return self._read(keys.event(event_id))

    def event_ids(self, product_id: str) -> list[int]:
        return list(self._read(keys.event_ids(product_id)) or [])

    def event_seq(self) -> int:
        return self._read(keys.event_seq()) or 0

    # --- Authorization entries ------------------------------------------------

    def has_auth_entry(self, product_id: str, actor: str) -> bool:
        return bool(self._read(keys.auth(product_id, actor)))

    # --- Positional indexes ---------------------------------------------------

    def type_count(self, product_id: str, event_type: str) -> int:
        return self._read(keys.event_type_count(product_id, event_type)) or 0

    def type_index_at(self, product_id: str, event_type: str, position: int) -> int | None:
        return self._read(keys.event_type_index(product_id, event_type, position))

    def actor_count(self, product_id: str, actor: str) -> int:
        return self._read(keys.actor_count(product_id, actor)) or 0

    def actor_index_at(self, product_id: str, actor: str, position: int) -> int | None:
        return self._read(keys.actor_index(product_id, actor, position))

    # --- Counters -------------------------------------------------------------

    def stats(self) -> ProductStats:
        return ProductStats(
            total_products=self._read(keys.total_products()) or 0,
            active_products=self._read(keys.active_products()) or 0,
        )


class LedgerTransaction(LedgerView):
    """Buffered writes over a LedgerStore, committed all at once."""

    def __init__(self, store: LedgerStore) -> None:
        super().__init__(store)
        self._writes: dict[StoreKey, Any | None] = {}
        self._committed = False

    def _read(self, key: StoreKey) -> Any | None:
        if key in self._writes:
            return self._writes[key]
        return self._store.get(key)

    def _write(self, key: StoreKey, value: Any | None) -> None:
        if self._committed:
            raise RuntimeError("Transaction already committed")
        self._writes[key] = value

    # --- Products -------------------------------------------------------------

    def put_product(self, product: Product) -> None:
        self._write(keys.product(product.id), product)

    def put_event_ids(self, product_id: str, ids: list[int]) -> None:
        self._write(keys.event_ids(product_id), list(ids))

    # --- Events ---------------------------------------------------------------

    def next_event_id(self) -> int:
        """Advance the ledger-wide sequence and return the new value."""
        seq = self.event_seq() + 1
        self._write(keys.event_seq(), seq)
        return seq

    def put_event(self, event: TrackingEvent) -> None:
        self._write(keys.event(event.event_id), event)

    # --- Authorization entries ------------------------------------------------

    def set_auth_entry(self, product_id: str, actor: str, granted: bool) -> None:
        # A revoked entry is removed rather than stored as False.
        self._write(keys.auth(product_id, actor), True if granted else None)

    # --- Positional indexes ---------------------------------------------------

    def set_type_count(self, product_id: str, event_type: str, count: int) -> None:
        self._write(keys.event_type_count(product_id, event_type), count)

    def set_type_index_at(self, product_id: str, event_type: str, position: int, event_id: int) -> None:
        self._write(keys.event_type_index(product_id, event_type, position), event_id)

    def set_actor_count(self, product_id: str, actor: str, count: int) -> None:
        self._write(keys.actor_count(product_id, actor), count)

    def set_actor_index_at(self, product_id: str, actor: str, position: int, event_id: int) -> None:
        self._write(keys.actor_index(product_id, actor, position), event_id)

    # --- Counters -------------------------------------------------------------

    def put_stats(self, stats: ProductStats) -> None:
        self._write(keys.total_products(), stats.total_products)
        self._write(keys.active_products(), stats.active_products)

    # --- Commit ---------------------------------------------------------------

    def commit(self) -> None:
        if self._committed:
            raise RuntimeError("Transaction already committed")
        if self._writes:
            self._store.write_batch(dict(self._writes))
        self._committed = True


@contextmanager
def atomic(store: LedgerStore) -> Iterator[LedgerTransaction]:
    """Run a block as one all-or-nothing transaction.

    The buffer is committed only if the block finishes without raising.
    """
    tx = LedgerTransaction(store)
    yield tx
    tx.commit()
