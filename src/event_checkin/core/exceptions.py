class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EventDayError(ValidationError):
    """Raised when scanning is attempted outside the configured event day."""


class NotFoundError(DomainError):
    """Raised when a registrant cannot be located by id or manual code."""


class AuthenticationError(DomainError):
    """Raised when a scanner password or token is rejected."""


class DuplicateManualCodeError(DomainError):
    """Raised by a repository when a manual code is already taken."""


class StorageError(Exception):
    """Raised when a QR image cannot be delivered to its storage backend."""
