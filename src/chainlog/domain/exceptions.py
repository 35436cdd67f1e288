"""Domain-level exceptions.

All ledger rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries a stable ``code`` that callers can match on without
parsing the message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DomainError"


# --- Lookup -------------------------------------------------------------------


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NotFound"


class ProductNotFoundError(EntityNotFoundError):
    code = "ProductNotFound"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' not found")
        self.product_id = product_id


class EventNotFoundError(EntityNotFoundError):
    code = "EventNotFound"

    def __init__(self, event_id: int) -> None:
        super().__init__(f"Tracking event #{event_id} not found")
        self.event_id = event_id


class AlreadyExistsError(DomainException):
    code = "AlreadyExists"


class ProductAlreadyExistsError(AlreadyExistsError):
    code = "ProductAlreadyExists"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' already exists")
        self.product_id = product_id


# --- Authorization ------------------------------------------------------------


class UnauthorizedError(DomainException):
    """The caller does not hold the capability the operation needs."""

    code = "Unauthorized"


class IdentityProofError(UnauthorizedError):
    """The call could not be proven to originate from the claimed identity."""

    code = "IdentityProofFailed"


# --- Input validation ---------------------------------------------------------


class ValidationError(DomainException):
    """Input failed a field-level rule. Nothing was written."""

    code = "InvalidInput"

    def __init__(self, message: str, field: str | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.field = field
        if code is not None:
            self.code = code


class FieldRequiredError(ValidationError):
    def __init__(self, field: str, code: str | None = None) -> None:
        super().__init__(f"'{field}' is required", field=field, code=code)


class FieldTooLongError(ValidationError):
    def __init__(self, field: str, max_length: int, code: str | None = None) -> None:
        super().__init__(
            f"'{field}' exceeds maximum length of {max_length} characters",
            field=field,
            code=code,
        )
        self.max_length = max_length


class TooManyItemsError(ValidationError):
    def __init__(self, field: str, max_items: int, code: str | None = None) -> None:
        super().__init__(
            f"'{field}' exceeds maximum of {max_items} items",
            field=field,
            code=code,
        )
        self.max_items = max_items


class InvalidFormatError(ValidationError):
    pass


# --- Lifecycle ----------------------------------------------------------------


class InvalidStateError(DomainException):
    """The operation is incompatible with the product's lifecycle state."""

    code = "InvalidState"


class ProductDeactivatedError(InvalidStateError):
    code = "ProductDeactivated"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' is deactivated")
        self.product_id = product_id


class ProductAlreadyActiveError(InvalidStateError):
    code = "ProductAlreadyActive"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' is already active")
        self.product_id = product_id


# --- Authorization entries ----------------------------------------------------


class AuthorizationEntryError(DomainException):
    code = "AuthorizationEntry"


class AlreadyAuthorizedError(AuthorizationEntryError):
    code = "AlreadyAuthorized"

    def __init__(self, product_id: str, actor: str) -> None:
        super().__init__(f"'{actor}' is already authorized for product '{product_id}'")


class NotAuthorizedEntryError(AuthorizationEntryError):
    code = "NotAuthorized"

    def __init__(self, product_id: str, actor: str) -> None:
        super().__init__(f"'{actor}' has no authorization entry for product '{product_id}'")


class CannotRemoveSelfError(AuthorizationEntryError):
    code = "CannotRemoveSelf"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"The owner of product '{product_id}' cannot revoke their own authorization"
        )
