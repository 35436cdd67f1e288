"""Product aggregate.

A product is registered once, never deleted, and moves between two
lifecycle states.  Ownership and lifecycle transitions are the only
mutations; tracking events live in their own store and only reference
the product by id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from chainlog.domain.exceptions import (
    FieldRequiredError,
    ProductAlreadyActiveError,
    ProductDeactivatedError,
    ValidationError,
)
from chainlog.domain.model import validation as v
from chainlog.domain.model.value_objects import ContentHash


class ProductStatus(Enum):
    ACTIVE = "ACTIVE"
    DEACTIVATED = "DEACTIVATED"


@dataclass(frozen=True)
class DeactivationRecord:
    """Why, when and by whom a product was taken out of circulation."""

    reason: str
    deactivated_at: int
    deactivated_by: str


@dataclass
class Product:
    """Aggregate root for a tracked item.

    Use the ``Product.register()`` factory for new products; it enforces
    every field limit.  The ``__init__`` stays simple so the store can
    reconstitute persisted products without re-validating.
    """

    id: str
    name: str
    description: str
    origin_location: str
    category: str
    owner: str
    created_at: int
    tags: list[str] = field(default_factory=list)
    certifications: list[ContentHash] = field(default_factory=list)
    media_hashes: list[ContentHash] = field(default_factory=list)
    custom: dict[str, str] = field(default_factory=dict)
    status: ProductStatus = ProductStatus.ACTIVE
    deactivation: DeactivationRecord | None = None

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def register(
        *,
        id: str,
        name: str,
        origin_location: str,
        category: str,
        owner: str,
        created_at: int,
        description: str = "",
        tags: list[str] | None = None,
        certifications: list[ContentHash] | None = None,
        media_hashes: list[ContentHash] | None = None,
        custom: dict[str, str] | None = None,
    ) -> Product:
        """Create a new, active product after validating every field.

        Checks run in a fixed order and the first violation wins, so the
        same bad input always reports the same error.
        """
        tags = list(tags or [])
        certifications = list(certifications or [])
        media_hashes = list(media_hashes or [])
        custom = dict(custom or {})

        v.require_text(id, "id", code="InvalidProductId")
        v.max_length(id, v.MAX_PRODUCT_ID_LEN, "id", code="ProductIdTooLong")
        v.require_text(name, "name", code="InvalidProductName")
        v.max_length(name, v.MAX_NAME_LEN, "name", code="ProductNameTooLong")
        v.require_text(origin_location, "origin_location", code="InvalidOrigin")
        v.max_length(origin_location, v.MAX_ORIGIN_LEN, "origin_location", code="OriginTooLong")
        v.require_text(category, "category", code="InvalidCategory")
        v.max_length(category, v.MAX_CATEGORY_LEN, "category", code="CategoryTooLong")
        v.max_length(description, v.MAX_DESCRIPTION_LEN, "description", code="DescriptionTooLong")

        v.max_items(tags, v.MAX_TAGS, "tags", code="TooManyTags")
        for tag in tags:
            v.max_length(tag, v.MAX_TAG_LEN, "tags", code="TagTooLong")
        v.max_items(certifications, v.MAX_CERTIFICATIONS, "certifications", code="TooManyCertifications")
        v.max_items(media_hashes, v.MAX_MEDIA_HASHES, "media_hashes", code="TooManyMediaHashes")
        v.string_map(
            custom,
            "custom",
            v.MAX_CUSTOM_FIELDS,
            v.MAX_CUSTOM_VALUE_LEN,
            too_many_code="TooManyCustomFields",
            too_long_code="CustomFieldValueTooLong",
        )

        return Product(
            id=id,
            name=name,
            description=description,
            origin_location=origin_location,
            category=category,
            owner=owner,
            created_at=created_at,
            tags=tags,
            certifications=certifications,
            media_hashes=media_hashes,
            custom=custom,
        )

    # --- State transitions ----------------------------------------------------

    @property
    def active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

    def deactivate(self, reason: str, at: int, by: str) -> None:
        """Transition ACTIVE -> DEACTIVATED, recording why."""
        if not reason:
            raise FieldRequiredError("reason", code="DeactivationReasonRequired")
        if not self.active:
            raise ProductDeactivatedError(self.id)
        self.status = ProductStatus.DEACTIVATED
        self.deactivation = DeactivationRecord(
            reason=reason, deactivated_at=at, deactivated_by=by
        )

    def reactivate(self) -> None:
        """Transition DEACTIVATED -> ACTIVE.  The old record is discarded."""
        if self.active:
            raise ProductAlreadyActiveError(self.id)
        self.status = ProductStatus.ACTIVE
        self.deactivation = None

    def transfer_to(self, new_owner: str) -> str:
        """Hand the product to *new_owner*; returns the previous owner."""
        if not new_owner:
            raise FieldRequiredError("new_owner")
        if new_owner == self.owner:
            raise ValidationError(
                f"Product '{self.id}' is already owned by '{new_owner}'",
                field="new_owner",
            )
        previous, self.owner = self.owner, new_owner
        return previous
