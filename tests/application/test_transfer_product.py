"""Integration tests for TransferProductHandler."""

import pytest

from chainlog.domain.exceptions import (
    IdentityProofError,
    UnauthorizedError,
    ValidationError,
)
from chainlog.domain.port.event_publisher import PRODUCT_TRANSFERRED
from tests.fakes import FakeIdentityVerifier
from tests.harness import COFFEE_ID, Ledger


def _setup(identity=None):
    ledger = Ledger(identity)
    ledger.register("farmer")
    ledger.granter.handle("farmer", COFFEE_ID, "carrier")
    return ledger


class TestTransfer:

    def test_new_owner_takes_over(self):
        ledger = _setup()
        product = ledger.transferrer.handle("farmer", COFFEE_ID, "roaster")

        assert product.owner == "roaster"
        assert ledger.products.handle(COFFEE_ID).owner == "roaster"
        assert ledger.auth.handle(COFFEE_ID, "roaster")

    def test_previous_owner_loses_access(self):
        ledger = _setup()
        ledger.transferrer.handle("farmer", COFFEE_ID, "roaster")

        assert not ledger.auth.handle(COFFEE_ID, "farmer")
        with pytest.raises(UnauthorizedError):
            ledger.track("farmer")
        with pytest.raises(UnauthorizedError):
            ledger.deactivator.handle("farmer", COFFEE_ID, "too late")

    def test_third_party_actors_kept(self):
        ledger = _setup()
        ledger.transferrer.handle("farmer", COFFEE_ID, "roaster")
        assert ledger.auth.handle(COFFEE_ID, "carrier")
        assert ledger.track("carrier") == 1

    def test_new_owner_can_manage(self):
        ledger = _setup()
        ledger.transferrer.handle("farmer", COFFEE_ID, "roaster")
        ledger.revoker.handle("roaster", COFFEE_ID, "carrier")
        assert not ledger.auth.handle(COFFEE_ID, "carrier")

    def test_notification(self):
        ledger = _setup()
        ledger.transferrer.handle("farmer", COFFEE_ID, "roaster")
        topic, payload = ledger.publisher.published[-1]
        assert topic == PRODUCT_TRANSFERRED
        assert payload == {"product_id": COFFEE_ID, "previous_owner": "farmer", "new_owner": "roaster"}


class TestTransferRejected:

    def test_actor_cannot_transfer(self):
        ledger = _setup()
        with pytest.raises(UnauthorizedError):
            ledger.transferrer.handle("carrier", COFFEE_ID, "carrier")
        assert ledger.products.handle(COFFEE_ID).owner == "farmer"

    def test_new_owner_must_prove_identity(self):
        ledger = _setup(FakeIdentityVerifier(proven=["farmer"]))
        with pytest.raises(IdentityProofError):
            ledger.transferrer.handle("farmer", COFFEE_ID, "roaster")
        assert ledger.products.handle(COFFEE_ID).owner == "farmer"
        assert ledger.auth.handle(COFFEE_ID, "farmer")

    def test_transfer_to_current_owner(self):
        ledger = _setup()
        with pytest.raises(ValidationError, match="already owned"):
            ledger.transferrer.handle("farmer", COFFEE_ID, "farmer")
