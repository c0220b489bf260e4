"""
Search Pagination Module

The catalog's search is an ASP.NET Web Forms page: the first page is a plain
GET, and every later page is a POST that echoes back the hidden postback
fields of the page before it. This module builds those requests, moves the
page state forward and wraps the loop in blocking and asynchronous streams.

A stream owns its state. Streams are not safe to share between callers;
run parallel searches with one stream each.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import AsyncIterator, Iterator, List, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

from .exceptions import InternalError, ParseError, SearchError, TransportError
from .models import RequestDescriptor, SearchPageMeta, SearchResult, TransportResponse
from .scrapers.search_scraper import SearchResultsScraper
from .transport.base import AsyncBaseTransport, BaseTransport

logger = logging.getLogger(__name__)


class SearchState(Enum):
    INITIAL = "initial"
    HAS_NEXT_PAGE = "has_next_page"
    EXHAUSTED = "exhausted"


def search_state(meta: SearchPageMeta) -> SearchState:
    if not meta.pagination.has_next_page:
        return SearchState.EXHAUSTED
    if meta.pagination.current_page == 0:
        return SearchState.INITIAL
    return SearchState.HAS_NEXT_PAGE


def build_search_request(search_url: str, query: str, meta: SearchPageMeta) -> RequestDescriptor:
    """
    Build the request for the next page of a search.

    The first page (no event target yet) is a GET with the query as ``q``.
    Later pages POST the five postback fields to the same URL.

    Raises:
        InternalError: If ``search_url`` is not an absolute URL
    """
    try:
        parts = urlsplit(search_url)
    except ValueError as e:
        raise InternalError(f"Failed to parse search url '{search_url}': {e}") from e
    if not parts.scheme or not parts.netloc:
        raise InternalError(f"Failed to parse search url '{search_url}'")

    url = urlunsplit(parts._replace(query=urlencode({'q': query})))
    if not meta.postback.event_target:
        return RequestDescriptor(method="GET", url=url)
    return RequestDescriptor(method="POST", url=url, form=meta.postback.as_form())


def advance(meta: SearchPageMeta, page_meta: SearchPageMeta) -> SearchPageMeta:
    """Return the state after a parsed page; its postback fields and flags replace the old ones."""
    pagination = page_meta.pagination
    if pagination.current_page == 0:
        pagination = replace(pagination, current_page=meta.pagination.current_page + 1)
    return SearchPageMeta(postback=page_meta.postback, pagination=pagination)


def exhaust(meta: SearchPageMeta) -> SearchPageMeta:
    return replace(meta, pagination=replace(meta.pagination, has_next_page=False))


def check_response(response: TransportResponse) -> None:
    if not response.ok:
        raise TransportError(
            f"request error: HTTP status {response.status} for url ({response.url})",
            status=response.status,
        )


class _SearchResultsStreamBase:
    """State and page handling shared by the blocking and async streams."""

    def __init__(self, query: str, search_url: str, scraper: Optional[SearchResultsScraper] = None):
        self.query = query
        self.search_url = search_url
        self.scraper = scraper or SearchResultsScraper()
        self.meta = SearchPageMeta()

    @property
    def state(self) -> SearchState:
        return search_state(self.meta)

    @property
    def has_next_page(self) -> bool:
        return self.meta.pagination.has_next_page

    @property
    def too_many_results(self) -> bool:
        """True when the search hit the catalog's cap of 1000 results."""
        return self.meta.pagination.too_many_results

    @property
    def current_page(self) -> int:
        return self.meta.pagination.current_page

    @property
    def page_count(self) -> int:
        return self.meta.pagination.page_count

    @property
    def result_count(self) -> int:
        return self.meta.pagination.result_count

    def _next_request(self) -> RequestDescriptor:
        return build_search_request(self.search_url, self.query, self.meta)

    def _fail(self) -> None:
        self.meta = exhaust(self.meta)

    def _process_search_page(self, response: TransportResponse) -> Optional[List[SearchResult]]:
        try:
            check_response(response)
            page = self.scraper.extract(response.body)
        except ParseError as e:
            self._fail()
            raise SearchError(f"Failed to parse search results for {self.query}: {e}", self.query) from e
        except Exception:
            self._fail()
            raise

        if page is None:
            self.meta = exhaust(self.meta)
            logger.info(f"Search for '{self.query}' exhausted after {self.current_page} page(s)")
            return None

        page_meta, results = page
        self.meta = advance(self.meta, page_meta)
        logger.info(f"Fetched page {self.current_page} of search '{self.query}' ({len(results)} results)")
        if not self.has_next_page:
            logger.info(f"Search for '{self.query}' has no further pages")
        return results


class SearchResultsStream(_SearchResultsStreamBase):
    """
    Blocking stream over the pages of a search.

    ``next()`` returns the results of the next page, or None once the search
    is exhausted. Iterating the stream yields one list per page.
    """

    def __init__(self, transport: BaseTransport, query: str, search_url: str,
                 scraper: Optional[SearchResultsScraper] = None):
        super().__init__(query, search_url, scraper)
        self.transport = transport

    def next(self) -> Optional[List[SearchResult]]:
        if not self.has_next_page:
            return None
        try:
            request = self._next_request()
            response = self.transport.execute(request)
        except Exception:
            self._fail()
            raise
        return self._process_search_page(response)

    def __iter__(self) -> Iterator[List[SearchResult]]:
        while True:
            results = self.next()
            if results is None:
                return
            yield results

    def collect(self) -> Optional[List[SearchResult]]:
        """Fetch every remaining page; None when the search found nothing."""
        results = [result for page in self for result in page]
        return results or None


class AsyncSearchResultsStream(_SearchResultsStreamBase):
    """
    Asynchronous stream over the pages of a search.

    ``await next()`` returns the results of the next page, or None once the
    search is exhausted. ``async for`` yields one list per page.
    """

    def __init__(self, transport: AsyncBaseTransport, query: str, search_url: str,
                 scraper: Optional[SearchResultsScraper] = None):
        super().__init__(query, search_url, scraper)
        self.transport = transport

    async def next(self) -> Optional[List[SearchResult]]:
        if not self.has_next_page:
            return None
        try:
            request = self._next_request()
            response = await self.transport.execute(request)
        except Exception:
            self._fail()
            raise
        return self._process_search_page(response)

    def __aiter__(self) -> AsyncIterator[List[SearchResult]]:
        return self

    async def __anext__(self) -> List[SearchResult]:
        results = await self.next()
        if results is None:
            raise StopAsyncIteration
        return results

    async def collect(self) -> Optional[List[SearchResult]]:
        """Fetch every remaining page; None when the search found nothing."""
        results = []
        async for page in self:
            results.extend(page)
        return results or None
