"""Application services: product-level queries.

Products stay readable after deactivation; only new events are refused.
"""

from __future__ import annotations

from chainlog.domain.model.product import Product
from chainlog.domain.model.stats import ProductStats
from chainlog.domain.repository.ledger_store import LedgerStore
from chainlog.domain.repository.ledger_transaction import LedgerView
from chainlog.domain.service.authorization_gate import AuthorizationGate


class ShowProductHandler:

    def __init__(self, store: LedgerStore) -> None:
        self._view = LedgerView(store)

    def handle(self, product_id: str) -> Product:
        return self._view.require_product(product_id)


class CheckAuthorizationHandler:

    def __init__(self, store: LedgerStore) -> None:
        self._view = LedgerView(store)

    def handle(self, product_id: str, actor: str) -> bool:
        """True if *actor* owns the product or holds an explicit grant."""
        product = self._view.require_product(product_id)
        return AuthorizationGate.capability_of(self._view, actor, product) is not None


class ShowStatsHandler:

    def __init__(self, store: LedgerStore) -> None:
        self._view = LedgerView(store)

    def handle(self) -> ProductStats:
        return self._view.stats()
