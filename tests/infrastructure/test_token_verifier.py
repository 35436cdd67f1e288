"""Tests for JWT identity tokens."""

import time

import pytest

from chainlog.domain.exceptions import IdentityProofError
from chainlog.infrastructure.identity.token_verifier import TokenIdentityVerifier, issue_token

SECRET = "test-secret"


class TestTokenIdentityVerifier:

    def test_valid_token_proves_subject(self):
        verifier = TokenIdentityVerifier([issue_token("farmer", SECRET)], SECRET)
        verifier.require("farmer")

    def test_other_identity_not_proven(self):
        verifier = TokenIdentityVerifier([issue_token("farmer", SECRET)], SECRET)
        with pytest.raises(IdentityProofError, match="'roaster'"):
            verifier.require("roaster")

    def test_two_tokens_prove_two_identities(self):
        tokens = [issue_token("farmer", SECRET), issue_token("roaster", SECRET)]
        verifier = TokenIdentityVerifier(tokens, SECRET)
        verifier.require("farmer")
        verifier.require("roaster")

    def test_wrong_secret(self):
        verifier = TokenIdentityVerifier([issue_token("farmer", "other-secret")], SECRET)
        with pytest.raises(IdentityProofError, match="Invalid identity token"):
            verifier.require("farmer")

    def test_expired_token(self):
        stale = issue_token("farmer", SECRET, ttl_seconds=60, now=int(time.time()) - 3600)
        verifier = TokenIdentityVerifier([stale], SECRET)
        with pytest.raises(IdentityProofError):
            verifier.require("farmer")

    def test_garbage_token(self):
        with pytest.raises(IdentityProofError):
            TokenIdentityVerifier(["not-a-jwt"], SECRET).require("farmer")

    def test_no_tokens(self):
        with pytest.raises(IdentityProofError):
            TokenIdentityVerifier([], SECRET).require("farmer")

    def test_empty_tokens_ignored(self):
        verifier = TokenIdentityVerifier(["", issue_token("farmer", SECRET)], SECRET)
        verifier.require("farmer")
