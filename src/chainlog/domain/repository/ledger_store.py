"""Abstract key-value substrate the ledger is persisted on.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON file, in-memory)
live elsewhere.  The store has no transactions of its own: atomicity is
layered on top by ``LedgerTransaction``, which hands every change of one
operation to ``write_batch`` at once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from chainlog.domain.model.keys import StoreKey


class LedgerStore(ABC):

    @abstractmethod
    def get(self, key: StoreKey) -> Any | None:
        """Return the value stored under *key*, or None."""

    @abstractmethod
    def set(self, key: StoreKey, value: Any) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def has(self, key: StoreKey) -> bool:
        """Return True if *key* holds a value."""

    @abstractmethod
    def remove(self, key: StoreKey) -> None:
        """Delete *key*; a missing key is not an error."""

    def write_batch(self, changes: Mapping[StoreKey, Any | None]) -> None:
        """Apply a set of writes; a value of None removes the key.

        The default applies them one by one.  Stores that can do better
        (a single file replace, a database transaction) should override.
        """
        for key, value in changes.items():
            if value is None:
                self.remove(key)
            else:
                self.set(key, value)
