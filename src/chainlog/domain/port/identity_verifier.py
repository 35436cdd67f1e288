"""Port: proof that a call genuinely originates from an identity."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IdentityVerifier(ABC):

    @abstractmethod
    def require(self, identity: str) -> None:
        """Return if the current call is proven to come from *identity*.

        Raises IdentityProofError otherwise.  Implementations decide what
        counts as proof (a signed token, an authenticated session).
        """
