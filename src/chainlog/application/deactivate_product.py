"""Application service: Deactivate Product use case.

Owner only.  Takes an ACTIVE product out of circulation (delivered,
recalled, archived) and records why.  Authorization entries are left
alone; a deactivated product simply refuses new events.
"""

from __future__ import annotations

import structlog

from chainlog.application.notifications import publish_committed
from chainlog.domain.exceptions import DomainException
from chainlog.domain.model.product import Product
from chainlog.domain.port.clock import Clock
from chainlog.domain.port.event_publisher import PRODUCT_DEACTIVATED, EventPublisher
from chainlog.domain.port.identity_verifier import IdentityVerifier
from chainlog.domain.repository.ledger_store import LedgerStore
from chainlog.domain.repository.ledger_transaction import atomic
from chainlog.domain.service.authorization_gate import AuthorizationGate

logger = structlog.get_logger()


class DeactivateProductHandler:

    def __init__(
        self,
        store: LedgerStore,
        identity: IdentityVerifier,
        clock: Clock,
        publisher: EventPublisher,
    ) -> None:
        self._store = store
        self._gate = AuthorizationGate(identity)
        self._clock = clock
        self._publisher = publisher

    def handle(self, owner: str, product_id: str, reason: str) -> Product:
        try:
            with atomic(self._store) as tx:
                product = self._gate.require_owner(tx, owner, product_id)

                product.deactivate(reason, at=self._clock.now(), by=owner)
                tx.put_product(product)

                stats = tx.stats()
                stats.record_deactivation()
                tx.put_stats(stats)
        except DomainException as exc:
            logger.warning(
                "product.deactivate_rejected",
                product_id=product_id,
                caller=owner,
                error=exc.code,
            )
            raise

        record = product.deactivation
        logger.info("product.deactivated", product_id=product_id, reason=reason)
        publish_committed(
            self._publisher,
            PRODUCT_DEACTIVATED,
            {
                "product_id": product_id,
                "reason": record.reason,
                "deactivated_at": record.deactivated_at,
                "deactivated_by": record.deactivated_by,
            },
        )
        return product
