"""Domain service: Authorization Gate.

Every mutating use case passes through here before it writes anything.
The gate first asks the identity verifier to prove the caller is who
they claim to be, then resolves the caller's capability on the product.
It never mutates state.
"""

from __future__ import annotations

from chainlog.domain.exceptions import (
    ProductDeactivatedError,
    UnauthorizedError,
)
from chainlog.domain.model.capability import Capability
from chainlog.domain.model.product import Product
from chainlog.domain.port.identity_verifier import IdentityVerifier
from chainlog.domain.repository.ledger_transaction import LedgerView


class AuthorizationGate:

    def __init__(self, identity: IdentityVerifier) -> None:
        self._identity = identity

    def verify(self, caller: str) -> None:
        """Proof-of-identity only, for calls that name no product yet."""
        self._identity.require(caller)

    def authorize(self, view: LedgerView, caller: str, product_id: str) -> Capability:
        """Resolve the caller's capability, or raise UnauthorizedError."""
        product = self._load(view, caller, product_id)
        return self._resolve(view, caller, product)

    def require_owner(self, view: LedgerView, caller: str, product_id: str) -> Product:
        """Return the product if *caller* owns it.

        Authorized actors and strangers get the same owner-only error.
        """
        product = self._load(view, caller, product_id)
        if self.capability_of(view, caller, product) != Capability.OWNER:
            raise UnauthorizedError(
                f"Only the owner of product '{product.id}' may do this"
            )
        return product

    def require_can_append(self, view: LedgerView, caller: str, product_id: str) -> Product:
        """Gate for adding tracking events; returns the product.

        A deactivated product rejects every new event, so that state check
        runs before the capability check: an authorized actor on a recalled
        product gets ProductDeactivatedError, not UnauthorizedError.
        """
        product = self._load(view, caller, product_id)
        if not product.active:
            raise ProductDeactivatedError(product.id)
        self._resolve(view, caller, product)
        return product

    def _load(self, view: LedgerView, caller: str, product_id: str) -> Product:
        # Identity proof precedes the existence check.
        self._identity.require(caller)
        return view.require_product(product_id)

    def _resolve(self, view: LedgerView, caller: str, product: Product) -> Capability:
        capability = self.capability_of(view, caller, product)
        if capability is None:
            raise UnauthorizedError(
                f"'{caller}' is not authorized for product '{product.id}'"
            )
        return capability

    @staticmethod
    def capability_of(view: LedgerView, caller: str, product: Product) -> Capability | None:
        if caller == product.owner:
            return Capability.OWNER
        if view.has_auth_entry(product.id, caller):
            return Capability.ACTOR
        return None
