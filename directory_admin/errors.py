"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when a create or update would violate an email uniqueness constraint."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or input validation fail (missing fields, short passwords, bad tokens)."""

    pass


class UnauthorizedError(DomainError):
    """Raised when credentials or the bearer token are missing, invalid or expired."""

    pass


class ForbiddenError(DomainError):
    """Raised when the caller is identified but lacks privilege, or the account is inactive or locked."""

    pass
