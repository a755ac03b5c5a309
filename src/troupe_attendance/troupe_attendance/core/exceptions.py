class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class UnsupportedFormatError(ValidationError):
    """Raised when an export is requested in an unknown encoding."""


class NotFoundError(DomainError):
    """Raised when a referenced member, story, poll, ... does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a member lacks permission for an action."""
