"""Application services: grant and revoke authorized actors.

Only the owner manages the actor list.  Entries survive deactivation and
ownership transfer; they disappear only through an explicit revoke.
"""

from __future__ import annotations

import structlog

from chainlog.domain.exceptions import (
    AlreadyAuthorizedError,
    CannotRemoveSelfError,
    DomainException,
    FieldRequiredError,
    NotAuthorizedEntryError,
)
from chainlog.domain.port.identity_verifier import IdentityVerifier
from chainlog.domain.repository.ledger_store import LedgerStore
from chainlog.domain.repository.ledger_transaction import atomic
from chainlog.domain.service.authorization_gate import AuthorizationGate

logger = structlog.get_logger()


class AddAuthorizedActorHandler:

    def __init__(self, store: LedgerStore, identity: IdentityVerifier) -> None:
        self._store = store
        self._gate = AuthorizationGate(identity)

    def handle(self, owner: str, product_id: str, actor: str) -> None:
        try:
            with atomic(self._store) as tx:
                self._gate.require_owner(tx, owner, product_id)

                if not actor:
                    raise FieldRequiredError("actor")
                if tx.has_auth_entry(product_id, actor):
                    raise AlreadyAuthorizedError(product_id, actor)
                tx.set_auth_entry(product_id, actor, True)
        except DomainException as exc:
            logger.warning(
                "actor.grant_rejected", product_id=product_id, actor=actor, error=exc.code
            )
            raise

        logger.info("actor.granted", product_id=product_id, actor=actor)


class RemoveAuthorizedActorHandler:

    def __init__(self, store: LedgerStore, identity: IdentityVerifier) -> None:
        self._store = store
        self._gate = AuthorizationGate(identity)

    def handle(self, owner: str, product_id: str, actor: str) -> None:
        try:
            with atomic(self._store) as tx:
                product = self._gate.require_owner(tx, owner, product_id)

                if actor == product.owner:
                    raise CannotRemoveSelfError(product_id)
                if not tx.has_auth_entry(product_id, actor):
                    raise NotAuthorizedEntryError(product_id, actor)
                tx.set_auth_entry(product_id, actor, False)
        except DomainException as exc:
            logger.warning(
                "actor.revoke_rejected", product_id=product_id, actor=actor, error=exc.code
            )
            raise

        logger.info("actor.revoked", product_id=product_id, actor=actor)
