"""Serialization between ledger records and JSON-compatible values.

Keys are tuples; they are written as compact JSON arrays so a key can be
used as an object member name.  Only products and events need a real
mapping; ids, counters, flags and id lists are JSON-native.
"""

from __future__ import annotations

import json
from typing import Any

from chainlog.domain.model import keys
from chainlog.domain.model.keys import StoreKey
from chainlog.domain.model.product import DeactivationRecord, Product, ProductStatus
from chainlog.domain.model.tracking_event import TrackingEvent
from chainlog.domain.model.value_objects import ContentHash

# --- Keys ---------------------------------------------------------------------


def encode_key(key: StoreKey) -> str:
    return json.dumps(list(key), separators=(",", ":"))


def decode_key(raw: str) -> StoreKey:
    return tuple(json.loads(raw))


# --- Values -------------------------------------------------------------------


def encode_value(key: StoreKey, value: Any) -> Any:
    kind = key[0]
    if kind == keys.PRODUCT:
        return product_to_raw(value)
    if kind == keys.EVENT:
        return event_to_raw(value)
    if kind == keys.EVENT_IDS:
        return list(value)
    return value


def decode_value(key: StoreKey, raw: Any) -> Any:
    kind = key[0]
    if kind == keys.PRODUCT:
        return product_to_domain(raw)
    if kind == keys.EVENT:
        return event_to_domain(raw)
    if kind == keys.EVENT_IDS:
        return list(raw)
    return raw


# --- Product ------------------------------------------------------------------


def product_to_raw(product: Product) -> dict:
    deactivation = product.deactivation
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "origin_location": product.origin_location,
        "category": product.category,
        "owner": product.owner,
        "created_at": product.created_at,
        "tags": list(product.tags),
        "certifications": [h.hex for h in product.certifications],
        "media_hashes": [h.hex for h in product.media_hashes],
        "custom": dict(product.custom),
        "status": product.status.value,
        "deactivation": (
            {
                "reason": deactivation.reason,
                "deactivated_at": deactivation.deactivated_at,
                "deactivated_by": deactivation.deactivated_by,
            }
            if deactivation is not None
            else None
        ),
    }


def product_to_domain(raw: dict) -> Product:
    deactivation = raw.get("deactivation")
    return Product(
        id=raw["id"],
        name=raw["name"],
        description=raw.get("description", ""),
        origin_location=raw["origin_location"],
        category=raw["category"],
        owner=raw["owner"],
        created_at=raw["created_at"],
        tags=list(raw.get("tags", [])),
        certifications=[ContentHash(h) for h in raw.get("certifications", [])],
        media_hashes=[ContentHash(h) for h in raw.get("media_hashes", [])],
        custom=dict(raw.get("custom", {})),
        status=ProductStatus(raw["status"]),
        deactivation=DeactivationRecord(**deactivation) if deactivation else None,
    )


# --- Event --------------------------------------------------------------------


def event_to_raw(event: TrackingEvent) -> dict:
    return {
        "event_id": event.event_id,
        "product_id": event.product_id,
        "actor": event.actor,
        "timestamp": event.timestamp,
        "event_type": event.event_type,
        "location": event.location,
        "data_hash": event.data_hash.hex,
        "note": event.note,
        "metadata": dict(event.metadata),
    }


def event_to_domain(raw: dict) -> TrackingEvent:
    return TrackingEvent(
        event_id=raw["event_id"],
        product_id=raw["product_id"],
        actor=raw["actor"],
        timestamp=raw["timestamp"],
        event_type=raw["event_type"],
        location=raw["location"],
        data_hash=ContentHash(raw["data_hash"]),
        note=raw.get("note", ""),
        metadata=dict(raw.get("metadata", {})),
    )
