"""
Error taxonomy and result types for the catalog.

Store and service operations never raise for expected failures.  They
return either ``Ok(value)`` or ``Err(error)`` where ``error`` is one of
the ``CatalogError`` subclasses below; the HTTP layer matches on the
variant and turns an ``Err`` into a ``{success: false, message}``
envelope with the error's status code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


class CatalogError(Exception):
    """Base class for catalog errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFile(CatalogError):
    """The upload request carried no package file."""

    status_code = 400
    default_message = "No file uploaded"


class MissingFields(CatalogError):
    """One or more required text fields were absent or empty.

    The message always lists every required field, not just the ones
    that were missing.
    """

    status_code = 400
    default_message = (
        "Missing required fields: name, description, version, and githubLink are required"
    )


class NotFound(CatalogError):
    """No record matches the requested identifier."""

    status_code = 404
    default_message = "App not found"


class PersistenceError(CatalogError):
    """The document store failed (connectivity, driver error, ...)."""

    status_code = 500
    default_message = "Failed to save app metadata"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: CatalogError


Result = Union[Ok[T], Err]
