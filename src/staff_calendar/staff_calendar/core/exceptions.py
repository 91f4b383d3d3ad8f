class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "DomainError"


class ValidationError(DomainError):
    """Raised when input data is invalid (bad date, month out of range, ...)."""

    kind = "InvalidInput"


class NotFoundError(DomainError):
    """Raised when a referenced event/assignment/project/employee does not exist."""

    kind = "NotFound"


class ConflictError(DomainError):
    """Raised on a duplicate event date or an overlapping assignment."""

    kind = "Conflict"


class QuotaExceededError(DomainError):
    """Raised when the weekly remote-work cap is reached."""

    kind = "QuotaExceeded"


class AuthenticationError(DomainError):
    """Raised when no usable identity accompanies a request."""

    kind = "Unauthenticated"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "Forbidden"


class InvalidOperationError(DomainError):
    """Raised when an action is not valid for the entity's current state."""

    kind = "InvalidOperation"
