class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when query input (year, month, branch) is invalid."""


class DataSourceError(DomainError):
    """Raised when the record snapshot cannot be read or decoded."""
