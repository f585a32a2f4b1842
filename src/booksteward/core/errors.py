# ABOUTME: Exception types raised by the BookSteward reconciliation engine.
# ABOUTME: Validation errors abort an operation; catalog errors wrap storage failures.


class BookStewardError(Exception):
    """Base class for BookSteward errors."""


class ValidationError(BookStewardError, ValueError):
    """Raised when a required argument is missing, before any work is done."""


class CatalogError(BookStewardError):
    """Raised when the library catalog fails to read or write a record."""


def require(value: object, name: str) -> None:
    """Raise ValidationError if value is None."""
    if value is None:
        raise ValidationError(f"{name} must not be None")
