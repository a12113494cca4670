"""
Custom exceptions for the route map.

Provides a hierarchy of exceptions for clear error handling
of dataset loading and flight-network store lookups.

Lookups that simply match nothing (an unknown city or airport code)
are not errors; they produce empty results.
"""

from pathlib import Path
from typing import Union


class RouteMapError(Exception):
    """Base exception for all route map errors."""

    pass


class StoreError(RouteMapError):
    """Raised when a flight-network store lookup cannot complete."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        message = f"Store lookup '{operation}' failed: {reason}"
        super().__init__(message)


class DatasetError(RouteMapError):
    """Base exception for dataset loading errors."""

    pass


class DatasetNotFoundError(DatasetError):
    """Raised when a dataset file does not exist."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        message = f"Dataset file not found: {self.path}"
        super().__init__(message)
