class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRoleError(ValidationError):
    """Raised when a role value is outside the allowed domain."""


class AuthenticationError(DomainError):
    """Raised when there is no valid session or login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StaleAuthorizationError(DomainError):
    """Raised when identity data read back after a role switch is out of date."""
