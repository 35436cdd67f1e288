"""Ledger-wide product counters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProductStats:
    """Incrementally maintained totals.

    Invariants:
    - ``total_products`` only ever grows
    - ``active_products`` never drops below zero
    """

    total_products: int = 0
    active_products: int = 0

    def record_registration(self) -> None:
        self.total_products += 1
        self.active_products += 1

    def record_deactivation(self) -> None:
        self.active_products = max(self.active_products - 1, 0)

    def record_reactivation(self) -> None:
        self.active_products += 1
