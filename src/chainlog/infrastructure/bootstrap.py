"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import Iterable

from chainlog.domain.port.event_publisher import EventPublisher
from chainlog.infrastructure.clock import SystemClock
from chainlog.infrastructure.config import get_settings
from chainlog.infrastructure.identity.token_verifier import TokenIdentityVerifier
from chainlog.infrastructure.persistence.json_ledger_store import JsonLedgerStore
from chainlog.infrastructure.publishers import JsonlEventPublisher, LogEventPublisher


def ledger_store() -> JsonLedgerStore:
    return JsonLedgerStore(get_settings().ledger_path)


def identity_verifier(tokens: Iterable[str]) -> TokenIdentityVerifier:
    settings = get_settings()
    return TokenIdentityVerifier(
        tokens, secret=settings.identity_secret, algorithm=settings.identity_algorithm
    )


def clock() -> SystemClock:
    return SystemClock()


def event_publisher() -> EventPublisher:
    settings = get_settings()
    if settings.outbox_enabled:
        return JsonlEventPublisher(settings.outbox_path)
    return LogEventPublisher()
