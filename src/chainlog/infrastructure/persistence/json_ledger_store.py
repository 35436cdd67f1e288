"""JSON-file-backed implementation of LedgerStore.

The whole ledger lives in one JSON object (encoded key -> raw value).  It
is read once when the store is opened; each ``write_batch`` writes a new
file next to the old one and renames it into place, so a crash mid-write
never leaves a half-applied batch on disk.

Not safe for concurrent writers in different processes.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from chainlog.domain.model.keys import StoreKey
from chainlog.domain.repository.ledger_store import LedgerStore
from chainlog.infrastructure.persistence.codec import decode_value, encode_key, encode_value


class JsonLedgerStore(LedgerStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()
        self._raw: dict[str, Any] = self._load_raw()

    # --- LedgerStore interface ------------------------------------------------

    def get(self, key: StoreKey) -> Any | None:
        raw = self._raw.get(encode_key(key))
        if raw is None:
            return None
        return decode_value(key, raw)

    def set(self, key: StoreKey, value: Any) -> None:
        self.write_batch({key: value})

    def has(self, key: StoreKey) -> bool:
        return encode_key(key) in self._raw

    def remove(self, key: StoreKey) -> None:
        self.write_batch({key: None})

    def write_batch(self, changes: Mapping[StoreKey, Any | None]) -> None:
        updated = dict(self._raw)
        for key, value in changes.items():
            encoded = encode_key(key)
            if value is None:
                updated.pop(encoded, None)
            else:
                updated[encoded] = encode_value(key, value)
        self._persist_raw(updated)
        self._raw = updated

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, Any]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, raw: dict[str, Any]) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
