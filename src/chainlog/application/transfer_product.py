"""Application service: Transfer Ownership use case.

Needs proof from both sides: the current owner authorizes the hand-over
and the new owner proves they accept it, so a product can never be
pushed onto an identity that did not agree.  Third-party actors keep
their authorization entries.
"""

from __future__ import annotations

import structlog

from chainlog.application.notifications import publish_committed
from chainlog.domain.exceptions import DomainException
from chainlog.domain.model.product import Product
from chainlog.domain.port.event_publisher import PRODUCT_TRANSFERRED, EventPublisher
from chainlog.domain.port.identity_verifier import IdentityVerifier
from chainlog.domain.repository.ledger_store import LedgerStore
from chainlog.domain.repository.ledger_transaction import atomic
from chainlog.domain.service.authorization_gate import AuthorizationGate

logger = structlog.get_logger()


class TransferProductHandler:

    def __init__(
        self,
        store: LedgerStore,
        identity: IdentityVerifier,
        publisher: EventPublisher,
    ) -> None:
        self._store = store
        self._gate = AuthorizationGate(identity)
        self._publisher = publisher

    def handle(self, owner: str, product_id: str, new_owner: str) -> Product:
        try:
            with atomic(self._store) as tx:
                product = self._gate.require_owner(tx, owner, product_id)
                self._gate.verify(new_owner)

                previous = product.transfer_to(new_owner)
                tx.set_auth_entry(product_id, previous, False)
                tx.put_product(product)
                tx.set_auth_entry(product_id, new_owner, True)
        except DomainException as exc:
            logger.warning(
                "product.transfer_rejected",
                product_id=product_id,
                caller=owner,
                new_owner=new_owner,
                error=exc.code,
            )
            raise

        logger.info(
            "product.transferred", product_id=product_id, previous_owner=owner, new_owner=new_owner
        )
        publish_committed(
            self._publisher,
            PRODUCT_TRANSFERRED,
            {"product_id": product_id, "previous_owner": owner, "new_owner": new_owner},
        )
        return product
