"""What a caller may do with a product, resolved once per call."""

from __future__ import annotations

from enum import Enum


class Capability(Enum):
    OWNER = "OWNER"  # lifecycle, transfer, actor management, events
    ACTOR = "ACTOR"  # events only
