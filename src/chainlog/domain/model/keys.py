"""Composite storage keys.

A key is a plain tuple whose first element names the record kind; the
store treats it as opaque.  Keeping them tuples keeps them hashable and
trivially serializable.
"""

from __future__ import annotations

StoreKey = tuple

PRODUCT = "Product"
EVENT_IDS = "EventIds"
EVENT = "Event"
EVENT_SEQ = "EventSeq"
AUTH = "Auth"
EVENT_TYPE_INDEX = "EventTypeIndex"
EVENT_TYPE_COUNT = "EventTypeCount"
ACTOR_INDEX = "ActorIndex"
ACTOR_COUNT = "ActorCount"
TOTAL_PRODUCTS = "TotalProducts"
ACTIVE_PRODUCTS = "ActiveProducts"


def product(product_id: str) -> StoreKey:
    return (PRODUCT, product_id)


def event_ids(product_id: str) -> StoreKey:
    return (EVENT_IDS, product_id)


def event(event_id: int) -> StoreKey:
    return (EVENT, event_id)


def event_seq() -> StoreKey:
    return (EVENT_SEQ,)


def auth(product_id: str, actor: str) -> StoreKey:
    return (AUTH, product_id, actor)


def event_type_index(product_id: str, event_type: str, position: int) -> StoreKey:
    return (EVENT_TYPE_INDEX, product_id, event_type, position)


def event_type_count(product_id: str, event_type: str) -> StoreKey:
    return (EVENT_TYPE_COUNT, product_id, event_type)


def actor_index(product_id: str, actor: str, position: int) -> StoreKey:
    return (ACTOR_INDEX, product_id, actor, position)


def actor_count(product_id: str, actor: str) -> StoreKey:
    return (ACTOR_COUNT, product_id, actor)


def total_products() -> StoreKey:
    return (TOTAL_PRODUCTS,)


def active_products() -> StoreKey:
    return (ACTIVE_PRODUCTS,)
