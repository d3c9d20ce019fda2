"""
Exception classes for the catalog search engine.
"""


class CatalogSearchError(Exception):
    """Base exception for all catalog search errors."""
    pass


class StrategyNotFoundError(CatalogSearchError):
    """
    Raised when a criterion key has no registered matcher strategy.

    This is a wiring defect (key set and strategy set out of sync), not a
    problem with the caller's input, and must not be retried.
    """
    def __init__(self, key):
        super().__init__(f"Strategy by key {key} not found")
        self.key = key


class ValidationError(CatalogSearchError):
    """Raised when a raw search value cannot be interpreted for its field."""
    def __init__(self, field: str, value: str, message: str = None):
        super().__init__(message or f"Invalid value {value!r} for field '{field}'")
        self.field = field
        self.value = value


class StorageError(CatalogSearchError):
    """Raised when catalog storage operations fail."""
    pass
