"""
msuc - a client for the Microsoft Update Catalog

The catalog has no API, so this package drives its search and update detail
pages directly and parses the HTML into typed records:
- Client / AsyncClient: blocking and asynchronous entry points
- SearchResultsStream / AsyncSearchResultsStream: page-by-page search traversal
- SearchResultsScraper / UpdateDetailsScraper: the HTML parsers
"""

__version__ = "1.0.0"

from .client import AsyncClient, Client
from .config import ClientConfig
from .exceptions import (
    CatalogError,
    InternalError,
    MsucError,
    ParseError,
    SearchError,
    TransportError,
)
from .models import (
    RebootBehavior,
    SearchResult,
    SupersededByUpdate,
    SupersedesUpdate,
    Update,
)
from .pagination import AsyncSearchResultsStream, SearchResultsStream, SearchState

__all__ = [
    "AsyncClient",
    "AsyncSearchResultsStream",
    "CatalogError",
    "Client",
    "ClientConfig",
    "InternalError",
    "MsucError",
    "ParseError",
    "RebootBehavior",
    "SearchError",
    "SearchResult",
    "SearchResultsStream",
    "SearchState",
    "SupersededByUpdate",
    "SupersedesUpdate",
    "TransportError",
    "Update",
]
