"""EventPublisher implementations."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog

from chainlog.domain.port.event_publisher import EventPublisher

logger = structlog.get_logger()


class LogEventPublisher(EventPublisher):
    """Writes each notification to the structured log."""

    def publish(self, topic: str, payload: dict[str, Any]) -> None:
        logger.info("notification", topic=topic, **payload)


class JsonlEventPublisher(EventPublisher):
    """Appends notifications to an outbox file, one JSON object per line.

    External indexers tail the file; the ledger never reads it back.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def publish(self, topic: str, payload: dict[str, Any]) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps({"topic": topic, "payload": payload}, sort_keys=True)
        with self._file_path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
