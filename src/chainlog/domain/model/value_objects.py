"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from chainlog.domain.exceptions import InvalidFormatError

HASH_BYTES = 32
_HEX_DIGITS = frozenset("0123456789abcdef")


@dataclass(frozen=True)
class ContentHash:
    """A 32-byte content digest, held as 64 lowercase hex characters.

    Used for certification documents, media files and the payload behind a
    tracking event.  The ledger never interprets the bytes; it only stores
    and returns them.
    """

    hex: str

    def __post_init__(self) -> None:
        if not isinstance(self.hex, str):
            raise InvalidFormatError(
                f"Content hash must be a hex string, got {type(self.hex).__name__}"
            )
        if len(self.hex) != HASH_BYTES * 2 or not set(self.hex) <= _HEX_DIGITS:
            raise InvalidFormatError(
                f"Content hash must be {HASH_BYTES * 2} lowercase hex characters, "
                f"got {self.hex!r}"
            )

    def __str__(self) -> str:
        return self.hex

    @property
    def short(self) -> str:
        return f"{self.hex[:8]}…{self.hex[-4:]}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(value: str | bytes) -> ContentHash:
        """Accept raw bytes or a hex string (any case, optional ``0x`` prefix)."""
        if isinstance(value, (bytes, bytearray)):
            if len(value) != HASH_BYTES:
                raise InvalidFormatError(
                    f"Content hash must be {HASH_BYTES} bytes, got {len(value)}"
                )
            return ContentHash(bytes(value).hex())
        if not isinstance(value, str):
            raise InvalidFormatError(
                f"Content hash must be bytes or a hex string, got {type(value).__name__}"
            )
        text = value.strip().lower()
        if text.startswith("0x"):
            text = text[2:]
        return ContentHash(text)

    @staticmethod
    def digest(data: bytes) -> ContentHash:
        """SHA-256 of *data*."""
        return ContentHash(hashlib.sha256(data).hexdigest())

    @staticmethod
    def zero() -> ContentHash:
        return ContentHash("0" * HASH_BYTES * 2)
