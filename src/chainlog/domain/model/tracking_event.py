"""TrackingEvent: an immutable fact about something that happened to a product."""

from __future__ import annotations

from dataclasses import dataclass, field

from chainlog.domain.model import validation as v
from chainlog.domain.model.value_objects import ContentHash

# Largest timestamp the ledger can represent; used as the "no upper bound"
# sentinel in EventFilter.
MAX_TIMESTAMP = 2**64 - 1


@dataclass(frozen=True)
class TrackingEvent:
    """Immutable once created.

    ``event_id`` comes from the ledger-wide sequence, so ids are unique
    and strictly increasing across all products.
    """

    event_id: int
    product_id: str
    actor: str
    timestamp: int
    event_type: str
    location: str
    data_hash: ContentHash
    note: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def validate_fields(event_type: str, metadata: dict[str, str]) -> None:
        """Check the caller-supplied fields before an id is allocated."""
        v.symbol(event_type, "event_type")
        v.string_map(
            metadata,
            "metadata",
            v.MAX_METADATA_ENTRIES,
            v.MAX_METADATA_VALUE_LEN,
            too_many_code="TooManyMetadataEntries",
            too_long_code="MetadataValueTooLong",
        )


@dataclass(frozen=True)
class EventFilter:
    """Composite filter where each default is a sentinel meaning "any".

    An empty ``event_type`` or ``location``, ``start_time == 0`` and
    ``end_time == MAX_TIMESTAMP`` all leave that dimension unconstrained.
    Time bounds are inclusive.
    """

    event_type: str = ""
    start_time: int = 0
    end_time: int = MAX_TIMESTAMP
    location: str = ""

    @property
    def constrains_type(self) -> bool:
        return self.event_type != ""

    @property
    def constrains_time(self) -> bool:
        return self.start_time != 0 or self.end_time != MAX_TIMESTAMP

    @property
    def constrains_location(self) -> bool:
        return self.location != ""

    def matches(self, event: TrackingEvent) -> bool:
        if self.constrains_type and event.event_type != self.event_type:
            return False
        if self.constrains_time and not (self.start_time <= event.timestamp <= self.end_time):
            return False
        if self.constrains_location and event.location != self.location:
            return False
        return True
