"""
Client Module

Entry points for the Microsoft Update Catalog: a blocking Client and an
asynchronous AsyncClient. Both share the scrapers and the pagination logic
and differ only in the transport they drive.
"""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

from .config import ClientConfig
from .exceptions import InternalError, ParseError
from .models import RequestDescriptor, SearchResult, TransportResponse, Update
from .pagination import AsyncSearchResultsStream, SearchResultsStream, check_response
from .scrapers.update_scraper import UpdateDetailsScraper
from .transport.base import AsyncBaseTransport, BaseTransport
from .transport.playwright_transport import PlaywrightTransport
from .transport.requests_transport import RequestsTransport

logger = logging.getLogger(__name__)


def build_update_url(update_url: str, update_id: str) -> str:
    """
    Return the details page URL for an update id.

    Raises:
        InternalError: If ``update_url`` is not an absolute URL
    """
    try:
        parts = urlsplit(update_url)
    except ValueError as e:
        raise InternalError(f"Failed to parse update url '{update_url}': {e}") from e
    if not parts.scheme or not parts.netloc:
        raise InternalError(f"Failed to parse update url '{update_url}'")
    return urlunsplit(parts._replace(query=urlencode({'updateid': update_id})))


class _ClientBase:
    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self.update_scraper = UpdateDetailsScraper()
        if self.config.debug:
            logging.getLogger('msuc').setLevel(logging.DEBUG)

    def build_update_url(self, update_id: str) -> str:
        return build_update_url(self.config.update_url, update_id)

    def build_update_request(self, update_id: str) -> RequestDescriptor:
        return RequestDescriptor(method="GET", url=self.build_update_url(update_id))

    def _process_update_page(self, update_id: str, response: TransportResponse) -> Update:
        check_response(response)
        try:
            return self.update_scraper.extract(response.body)
        except ParseError as e:
            raise ParseError(f"Failed to parse update details for {update_id}: {e}") from e


class Client(_ClientBase):
    """
    Blocking client for the Microsoft Update Catalog.

    Example:
        with Client() as client:
            for page in client.search("MS08-067"):
                for result in page:
                    print(result.id, result.title)
    """

    def __init__(self, config: Optional[ClientConfig] = None, transport: Optional[BaseTransport] = None):
        """
        Initialize the client.

        Args:
            config (Optional[ClientConfig]): Endpoints and HTTP settings
            transport (Optional[BaseTransport]): Transport to use, a RequestsTransport by default
        """
        super().__init__(config)
        self.transport = transport or RequestsTransport(self.config)

    def search(self, query: str) -> SearchResultsStream:
        """
        Start a search. No request is made until the stream is advanced.

        Args:
            query (str): Free text search query

        Returns:
            SearchResultsStream: Stream yielding one list of results per page
        """
        return SearchResultsStream(self.transport, query, self.config.search_url)

    def search_all(self, query: str) -> Optional[List[SearchResult]]:
        """Run a search to the end and return every result, or None if nothing matched."""
        return self.search(query).collect()

    def get_update(self, update_id: str) -> Update:
        """
        Retrieve the details of an update.

        Args:
            update_id (str): Update id, as found in SearchResult.id

        Returns:
            Update: The update details

        Raises:
            TransportError: If the request fails
            ParseError: If the details page cannot be parsed
        """
        response = self.transport.execute(self.build_update_request(update_id))
        return self._process_update_page(update_id, response)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class AsyncClient(_ClientBase):
    """
    Asynchronous client for the Microsoft Update Catalog.

    Example:
        async with AsyncClient() as client:
            async for page in client.search("MS08-067"):
                for result in page:
                    print(result.id, result.title)
    """

    def __init__(self, config: Optional[ClientConfig] = None, transport: Optional[AsyncBaseTransport] = None):
        """
        Initialize the client.

        Args:
            config (Optional[ClientConfig]): Endpoints and HTTP settings
            transport (Optional[AsyncBaseTransport]): Transport to use, a PlaywrightTransport by default
        """
        super().__init__(config)
        self.transport = transport or PlaywrightTransport(self.config)

    def search(self, query: str) -> AsyncSearchResultsStream:
        return AsyncSearchResultsStream(self.transport, query, self.config.search_url)

    async def search_all(self, query: str) -> Optional[List[SearchResult]]:
        return await self.search(query).collect()

    async def get_update(self, update_id: str) -> Update:
        response = await self.transport.execute(self.build_update_request(update_id))
        return self._process_update_page(update_id, response)

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self):
        await self.transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
