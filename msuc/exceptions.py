"""
Exceptions raised by the msuc client.

Every error derives from MsucError so callers can catch the whole family,
while the subclasses keep transport, parsing, search and catalog-reported
failures apart.
"""

from typing import Optional


class MsucError(Exception):
    """Base class for all errors raised by this package."""


class TransportError(MsucError):
    """The HTTP request failed or returned a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ParseError(MsucError):
    """An expected element was missing or a value could not be converted."""


class SearchError(MsucError):
    """A page of a search could not be parsed."""

    def __init__(self, message: str, query: str):
        super().__init__(message)
        self.query = query


class CatalogError(MsucError):
    """The catalog returned a success status with an error page in the body."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        return f"Microsoft Update Catalog error: {self.args[0]}, code: {self.code}"


class InternalError(MsucError):
    """One of the fixed catalog endpoints is malformed."""
