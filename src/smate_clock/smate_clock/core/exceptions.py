class DomainError(Exception):
    """Base exception for business rule violations.

    Subclasses form a closed set; callers branch on the class or on ``code``.
    """

    code = "DOMAIN_ERROR"
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthorizedError(DomainError):
    """Raised when there is no verified acting identity."""

    code = "UNAUTHORIZED"


class ForbiddenError(DomainError):
    """Raised when an authenticated user lacks the role for an action."""

    code = "FORBIDDEN"


class NotFoundError(DomainError):
    """Raised when a referenced location or entity does not exist."""

    code = "NOT_FOUND"


class OutsidePerimeterError(DomainError):
    """Raised when a clock action is reported outside the location geofence."""

    code = "OUTSIDE_PERIMETER"


class InvalidStateError(DomainError):
    """Raised on an illegal clock transition."""

    code = "INVALID_STATE"


class TransientError(DomainError):
    """Raised when the store or authenticator is unavailable or timed out."""

    code = "TRANSIENT"
    retryable = True
