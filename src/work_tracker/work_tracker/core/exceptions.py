class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when a punch is malformed, duplicated or misses a required field."""


class ConsistencyError(DomainError):
    """Raised when a punch does not fit the day's sequence (e.g. orphan break end)."""


class NotFoundError(DomainError):
    """Raised when an edit targets an unknown record id."""


class DataImportError(DomainError):
    """Raised when an import payload is not a list of punch records."""


class StorageError(DomainError):
    """Raised when reading or writing the local store fails."""
