"""Field limits and the small checks shared by products and events.

Every check raises the specific ValidationError subclass for the rule it
enforces, tagged with a stable error code, and never mutates its input.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from chainlog.domain.exceptions import (
    FieldRequiredError,
    FieldTooLongError,
    InvalidFormatError,
    TooManyItemsError,
)

# ---------------------------------------------------------------------------
# Limits (all maxima inclusive)
# ---------------------------------------------------------------------------
MAX_PRODUCT_ID_LEN = 64
MAX_NAME_LEN = 128
MAX_ORIGIN_LEN = 128
MAX_CATEGORY_LEN = 64
MAX_DESCRIPTION_LEN = 512
MAX_TAGS = 20
MAX_TAG_LEN = 64
MAX_CERTIFICATIONS = 50
MAX_MEDIA_HASHES = 50
MAX_CUSTOM_FIELDS = 20
MAX_CUSTOM_VALUE_LEN = 256
MAX_METADATA_ENTRIES = 20
MAX_METADATA_VALUE_LEN = 256
MAX_SYMBOL_LEN = 32
MAX_BATCH_SIZE = 100

_SYMBOL_RE = re.compile(r"[A-Za-z0-9_]+")


def require_text(value: str, field: str, code: str | None = None) -> None:
    if not value:
        raise FieldRequiredError(field, code=code)


def max_length(value: str, limit: int, field: str, code: str | None = None) -> None:
    if len(value) > limit:
        raise FieldTooLongError(field, limit, code=code)


def max_items(items: Sequence | Mapping, limit: int, field: str, code: str | None = None) -> None:
    if len(items) > limit:
        raise TooManyItemsError(field, limit, code=code)


def symbol(value: str, field: str) -> None:
    """Short identifier: letters, digits and underscores, at most 32 chars."""
    require_text(value, field)
    max_length(value, MAX_SYMBOL_LEN, field)
    if not _SYMBOL_RE.fullmatch(value):
        raise InvalidFormatError(
            f"'{field}' may only contain letters, digits and underscores, got {value!r}",
            field=field,
        )


def string_map(
    entries: Mapping[str, str],
    field: str,
    max_entries: int,
    max_value_len: int,
    too_many_code: str | None = None,
    too_long_code: str | None = None,
) -> None:
    """Validate an open key -> value map such as custom fields or metadata."""
    max_items(entries, max_entries, field, code=too_many_code)
    for key, value in entries.items():
        symbol(key, f"{field} key")
        max_length(value, max_value_len, f"{field}[{key}]", code=too_long_code)
