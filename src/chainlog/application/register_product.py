"""Application service: Register Product use case (single and batch).

A batch is one transaction: every item is validated and duplicate-checked
against the store *and* against the items before it, and if any item is
rejected nothing at all is written.
"""

from __future__ import annotations

import structlog

from chainlog.application.dto import ProductSpec
from chainlog.application.notifications import publish_committed
from chainlog.domain.exceptions import DomainException, ProductAlreadyExistsError
from chainlog.domain.model import validation as v
from chainlog.domain.model.product import Product
from chainlog.domain.port.clock import Clock
from chainlog.domain.port.event_publisher import PRODUCT_REGISTERED, EventPublisher
from chainlog.domain.port.identity_verifier import IdentityVerifier
from chainlog.domain.repository.ledger_store import LedgerStore
from chainlog.domain.repository.ledger_transaction import LedgerTransaction, atomic
from chainlog.domain.service.authorization_gate import AuthorizationGate

logger = structlog.get_logger()


class RegisterProductHandler:

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

    def handle(self, owner: str, spec: ProductSpec) -> Product:
        """Register one product owned by *owner*."""
        return self.handle_batch(owner, [spec])[0]

    def handle_batch(self, owner: str, specs: list[ProductSpec]) -> list[Product]:
        """Register every product in *specs*, or none of them."""
        try:
            self._gate.verify(owner)
            v.max_items(specs, v.MAX_BATCH_SIZE, "batch")
            now = self._clock.now()
            with atomic(self._store) as tx:
                products = [self._register(tx, owner, spec, now) for spec in specs]
        except DomainException as exc:
            logger.warning(
                "product.register_rejected", owner=owner, error=exc.code, reason=str(exc)
            )
            raise

        for product in products:
            logger.info("product.registered", product_id=product.id, owner=owner)
            publish_committed(
                self._publisher,
                PRODUCT_REGISTERED,
                {
                    "product_id": product.id,
                    "owner": owner,
                    "name": product.name,
                    "category": product.category,
                    "created_at": product.created_at,
                },
            )
        return products

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _register(tx: LedgerTransaction, owner: str, spec: ProductSpec, now: int) -> Product:
        product = Product.register(
            id=spec.id,
            name=spec.name,
            description=spec.description,
            origin_location=spec.origin_location,
            category=spec.category,
            tags=spec.tags,
            certifications=spec.certifications,
            media_hashes=spec.media_hashes,
            custom=spec.custom,
            owner=owner,
            created_at=now,
        )

        if tx.has_product(product.id):
            raise ProductAlreadyExistsError(product.id)

        tx.put_product(product)
        tx.put_event_ids(product.id, [])
        tx.set_auth_entry(product.id, owner, True)

        stats = tx.stats()
        stats.record_registration()
        tx.put_stats(stats)
        return product
