"""Signed identity tokens: the proof-of-identity used at the CLI boundary.

A token is an HS256 JWT whose ``sub`` claim names the identity it proves.
The caller presents one token per identity the request speaks for (two
for an ownership transfer: the current owner's and the new owner's).
"""

from __future__ import annotations

import time
from collections.abc import Iterable

from jose import JWTError, jwt

from chainlog.domain.exceptions import IdentityProofError
from chainlog.domain.port.identity_verifier import IdentityVerifier


def issue_token(
    identity: str,
    secret: str,
    algorithm: str = "HS256",
    ttl_seconds: int = 3600,
    now: int | None = None,
) -> str:
    """Create a token proving *identity* for *ttl_seconds*."""
    issued_at = int(time.time()) if now is None else now
    claims = {"sub": identity, "iat": issued_at, "exp": issued_at + ttl_seconds}
    return jwt.encode(claims, secret, algorithm=algorithm)


class TokenIdentityVerifier(IdentityVerifier):

    def __init__(self, tokens: Iterable[str], secret: str, algorithm: str = "HS256") -> None:
        self._tokens = [t for t in tokens if t]
        self._secret = secret
        self._algorithm = algorithm
        self._proven: set[str] | None = None

    def require(self, identity: str) -> None:
        if identity not in self._proven_identities():
            raise IdentityProofError(f"No valid identity proof presented for '{identity}'")

    def _proven_identities(self) -> set[str]:
        if self._proven is None:
            proven = set()
            for token in self._tokens:
                try:
                    claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
                except JWTError as exc:
                    raise IdentityProofError(f"Invalid identity token: {exc}") from exc
                subject = claims.get("sub")
                if subject:
                    proven.add(subject)
            self._proven = proven
        return self._proven
