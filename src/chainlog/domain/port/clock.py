"""Port: source of the current timestamp."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Clock(ABC):

    @abstractmethod
    def now(self) -> int:
        """Current time in whole seconds; never decreases."""
