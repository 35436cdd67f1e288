"""Unit tests for domain value objects."""

import hashlib

import pytest

from chainlog.domain.exceptions import InvalidFormatError
from chainlog.domain.model.value_objects import ContentHash

HEX = "ab" * 32


# ── ContentHash ──────────────────────────────────────────────────────────────


class TestContentHash:

    def test_creation(self):
        h = ContentHash(HEX)
        assert h.hex == HEX
        assert str(h) == HEX

    def test_equal_by_value(self):
        assert ContentHash(HEX) == ContentHash("ab" * 32)

    def test_of_normalizes_case_and_prefix(self):
        assert ContentHash.of("0x" + HEX.upper()) == ContentHash(HEX)

    def test_of_accepts_raw_bytes(self):
        assert ContentHash.of(bytes([0xAB] * 32)) == ContentHash(HEX)

    def test_of_rejects_wrong_byte_length(self):
        with pytest.raises(InvalidFormatError, match="32 bytes"):
            ContentHash.of(b"\x00" * 31)

    def test_of_rejects_non_text(self):
        with pytest.raises(InvalidFormatError, match="got int"):
            ContentHash.of(5)

    def test_wrong_length_rejected(self):
        with pytest.raises(InvalidFormatError, match="64 lowercase hex"):
            ContentHash("ab" * 31)

    def test_non_hex_rejected(self):
        with pytest.raises(InvalidFormatError, match="64 lowercase hex"):
            ContentHash("zz" * 32)

    def test_uppercase_rejected_by_constructor(self):
        with pytest.raises(InvalidFormatError):
            ContentHash(HEX.upper())

    def test_digest_is_sha256(self):
        assert ContentHash.digest(b"lot-42").hex == hashlib.sha256(b"lot-42").hexdigest()

    def test_zero(self):
        assert ContentHash.zero().hex == "0" * 64

    def test_short_form(self):
        assert ContentHash(HEX).short == "abababab…abab"
