"""Application service: Reactivate Product use case."""

from __future__ import annotations

import structlog

from chainlog.application.notifications import publish_committed
from chainlog.domain.exceptions import DomainException
from chainlog.domain.model.product import Product
from chainlog.domain.port.clock import Clock
from chainlog.domain.port.event_publisher import PRODUCT_REACTIVATED, EventPublisher
from chainlog.domain.port.identity_verifier import IdentityVerifier
from chainlog.domain.repository.ledger_store import LedgerStore
from chainlog.domain.repository.ledger_transaction import atomic
from chainlog.domain.service.authorization_gate import AuthorizationGate

logger = structlog.get_logger()


class ReactivateProductHandler:

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

    def handle(self, owner: str, product_id: str) -> Product:
        """Bring a DEACTIVATED product back; the deactivation record is dropped."""
        try:
            with atomic(self._store) as tx:
                product = self._gate.require_owner(tx, owner, product_id)
                reactivated_at = self._clock.now()

                product.reactivate()
                tx.put_product(product)

                stats = tx.stats()
                stats.record_reactivation()
                tx.put_stats(stats)
        except DomainException as exc:
            logger.warning(
                "product.reactivate_rejected",
                product_id=product_id,
                caller=owner,
                error=exc.code,
            )
            raise

        logger.info("product.reactivated", product_id=product_id)
        publish_committed(
            self._publisher,
            PRODUCT_REACTIVATED,
            {
                "product_id": product_id,
                "reactivated_by": owner,
                "reactivated_at": reactivated_at,
            },
        )
        return product
