"""Integration tests for granting and revoking authorized actors."""

import pytest

from chainlog.application.manage_actors import AddAuthorizedActorHandler
from chainlog.domain.exceptions import (
    AlreadyAuthorizedError,
    CannotRemoveSelfError,
    FieldRequiredError,
    IdentityProofError,
    NotAuthorizedEntryError,
    ProductNotFoundError,
    UnauthorizedError,
)
from tests.fakes import FakeIdentityVerifier
from tests.harness import COFFEE_ID, Ledger


def _setup():
    ledger = Ledger()
    ledger.register("farmer")
    return ledger


class TestGrant:

    def test_grant(self):
        ledger = _setup()
        ledger.granter.handle("farmer", COFFEE_ID, "carrier")
        assert ledger.auth.handle(COFFEE_ID, "carrier")

    def test_grant_twice(self):
        ledger = _setup()
        ledger.granter.handle("farmer", COFFEE_ID, "carrier")
        with pytest.raises(AlreadyAuthorizedError, match="already authorized"):
            ledger.granter.handle("farmer", COFFEE_ID, "carrier")

    def test_owner_already_has_entry(self):
        ledger = _setup()
        with pytest.raises(AlreadyAuthorizedError):
            ledger.granter.handle("farmer", COFFEE_ID, "farmer")

    def test_empty_actor(self):
        ledger = _setup()
        with pytest.raises(FieldRequiredError):
            ledger.granter.handle("farmer", COFFEE_ID, "")

    def test_actor_cannot_grant(self):
        ledger = _setup()
        ledger.granter.handle("farmer", COFFEE_ID, "carrier")
        with pytest.raises(UnauthorizedError):
            ledger.granter.handle("carrier", COFFEE_ID, "friend")
        assert not ledger.auth.handle(COFFEE_ID, "friend")

    def test_stranger_cannot_grant(self):
        ledger = _setup()
        with pytest.raises(UnauthorizedError, match="Only the owner"):
            ledger.granter.handle("stranger", COFFEE_ID, "stranger")
        assert not ledger.auth.handle(COFFEE_ID, "stranger")

    def test_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            Ledger().granter.handle("farmer", "GHOST", "carrier")

    def test_owner_without_proof(self):
        ledger = _setup()
        granter = AddAuthorizedActorHandler(ledger.store, FakeIdentityVerifier(proven=[]))
        with pytest.raises(IdentityProofError):
            granter.handle("farmer", COFFEE_ID, "carrier")
        assert not ledger.auth.handle(COFFEE_ID, "carrier")


class TestRevoke:

    def test_revoke(self):
        ledger = _setup()
        ledger.granter.handle("farmer", COFFEE_ID, "carrier")
        ledger.revoker.handle("farmer", COFFEE_ID, "carrier")

        assert not ledger.auth.handle(COFFEE_ID, "carrier")
        with pytest.raises(UnauthorizedError):
            ledger.track("carrier")

    def test_revoke_missing_entry(self):
        ledger = _setup()
        with pytest.raises(NotAuthorizedEntryError):
            ledger.revoker.handle("farmer", COFFEE_ID, "stranger")

    def test_owner_cannot_revoke_self(self):
        ledger = _setup()
        with pytest.raises(CannotRemoveSelfError):
            ledger.revoker.handle("farmer", COFFEE_ID, "farmer")
        assert ledger.auth.handle(COFFEE_ID, "farmer")

    def test_regrant_after_revoke(self):
        ledger = _setup()
        ledger.granter.handle("farmer", COFFEE_ID, "carrier")
        ledger.revoker.handle("farmer", COFFEE_ID, "carrier")
        ledger.granter.handle("farmer", COFFEE_ID, "carrier")
        assert ledger.auth.handle(COFFEE_ID, "carrier")

    def test_history_kept_after_revoke(self):
        ledger = _setup()
        ledger.granter.handle("farmer", COFFEE_ID, "carrier")
        ledger.track("carrier")
        ledger.revoker.handle("farmer", COFFEE_ID, "carrier")
        assert ledger.events.event_count_by_actor(COFFEE_ID, "carrier") == 1


class TestCheckAuthorization:

    def test_stranger(self):
        assert not _setup().auth.handle(COFFEE_ID, "stranger")

    def test_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            Ledger().auth.handle("GHOST", "farmer")
