class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when a request parameter or body field is invalid."""


class DuplicateAttendanceError(DomainError):
    """Raised when a student already has a record for the date and the policy forbids another."""


class ConfigurationError(DomainError):
    """Raised when the storage configuration is incomplete."""


class StorageError(DomainError):
    """Raised when a query or write against the database fails."""


class StatisticsUnavailableError(StorageError):
    """Raised when any part of the statistics aggregation fails."""
