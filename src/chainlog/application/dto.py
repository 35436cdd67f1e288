"""Data Transfer Objects: plain containers that cross layer boundaries.

Specs carry caller input from the CLI (or any other adapter) into the
application layer without exposing domain constructors to the outside.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chainlog.domain.model.value_objects import ContentHash


@dataclass(frozen=True)
class ProductSpec:
    """Input: everything needed to register one product."""

    id: str
    name: str
    origin_location: str
    category: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    certifications: list[ContentHash] = field(default_factory=list)
    media_hashes: list[ContentHash] = field(default_factory=list)
    custom: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EventSpec:
    """Input: one tracking event to append."""

    event_type: str
    location: str
    data_hash: ContentHash
    note: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
