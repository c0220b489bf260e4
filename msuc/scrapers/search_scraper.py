"""
Search Scraper Module

This module parses one page of Microsoft Update Catalog search results into
SearchResult records plus the postback state needed to request the next page.
"""

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ..exceptions import CatalogError, ParseError
from ..models import (
    PostbackFields,
    SearchPage,
    SearchPageMeta,
    SearchPagePaginationMeta,
    SearchResult,
)
from ..utils.value_parsers import (
    parse_kb_from_string,
    parse_optional_string,
    parse_search_row_id,
    parse_size_from_mb_string,
    parse_update_date,
)
from .base_scraper import BaseScraper
from .mixins import HTMLExtractorMixin
from .row_selector import SearchResColumn, get_search_row_text

logger = logging.getLogger(__name__)

ERROR_BANNER = "div#errorPageDisplayedError"
RESULT_ROWS = "div#tableContainer tr"
HEADER_ROW_ID = "headerRow"
NEXT_PAGE_LINK = "#ctl00_catalogBody_nextPageLinkText"
# the event target the next page link posts back with
NEXT_PAGE_EVENT_TARGET = "ctl00$catalogBody$nextPageLinkText"
TOO_MANY_RESULTS_BANNER = "#ctl00_catalogBody_moreResults"
SEARCH_SUMMARY = "#ctl00_catalogBody_searchDuration"

_ERROR_CODE_PREFIX = "[Error number: "
_SUMMARY_PATTERN = re.compile(
    r'(\d+)\s*-\s*(\d+)\s+of\s+(\d+)\s*\(\s*page\s+(\d+)\s+of\s+(\d+)\s*\)',
    re.IGNORECASE,
)


class SearchResultsScraper(HTMLExtractorMixin, BaseScraper):
    """
    Search results page scraper.

    The results live in a table inside ``div#tableContainer``. Every row id
    encodes the update id and the row index, and every cell id is derived
    from both, see row_selector.
    """

    def extract(self, content: str) -> Optional[SearchPage]:
        """
        Parse a search results page.

        Args:
            content (str): Raw HTML of the search page

        Returns:
            Optional[SearchPage]: The page state and the results, or None when
            the page has no result rows, which ends the search

        Raises:
            CatalogError: If the catalog rendered its error page
            ParseError: If a row or a required hidden field is malformed
        """
        document = self.parse_document(content)
        # error pages have no result rows, so this has to come first
        self.check_hidden_error(document)

        results = self.extract_rows(document)
        if not results:
            logger.debug("Search page contained no result rows")
            return None

        return self.extract_page_meta(document), results

    def check_hidden_error(self, document: BeautifulSoup) -> None:
        """
        Raise if the page is the catalog's error page.

        The catalog answers some failures with a 200 whose body carries a
        banner like ``[Error number: 8DDD0010]``.
        """
        banner = self.find_element(document, ERROR_BANNER)
        if banner is None:
            return
        text = self.element_text(banner)
        _, marker, tail = text.partition(_ERROR_CODE_PREFIX)
        if marker:
            code = tail.partition("]")[0].strip()
        else:
            code = text.strip("[]").strip()
        logger.error(f"Microsoft Update Catalog returned an error page, code {code}")
        raise CatalogError("received 500 error from Microsoft Update Catalog", code)

    def extract_rows(self, document: BeautifulSoup) -> List[SearchResult]:
        results = []
        for row in self.find_all_elements(document, RESULT_ROWS):
            row_id = row.get("id")
            if row_id is None:
                raise ParseError("Failed to find id attribute for search result element")
            if row_id == HEADER_ROW_ID:
                continue
            results.append(self.extract_row(row, row_id))
        logger.debug(f"Parsed {len(results)} search result rows")
        return results

    def extract_row(self, row: Tag, row_id: str) -> SearchResult:
        update_id, row_index = parse_search_row_id(row_id)

        def cell(column: SearchResColumn) -> str:
            return get_search_row_text(row, column, update_id, row_index)

        title = cell(SearchResColumn.TITLE)
        # the cell also holds the exact byte count in a hidden span; the
        # rounded MB string is used to match the update details page
        size = cell(SearchResColumn.SIZE).split("\n")[0].strip()

        return SearchResult(
            title=title,
            id=update_id,
            kb=parse_kb_from_string(title),
            product=cell(SearchResColumn.PRODUCT),
            classification=cell(SearchResColumn.CLASSIFICATION),
            last_modified=parse_update_date(cell(SearchResColumn.LAST_UPDATED)),
            version=parse_optional_string(cell(SearchResColumn.VERSION)),
            size=parse_size_from_mb_string(size),
        )

    def extract_page_meta(self, document: BeautifulSoup) -> SearchPageMeta:
        has_next_page = self.has_element(document, NEXT_PAGE_LINK)
        postback = PostbackFields(
            event_target=NEXT_PAGE_EVENT_TARGET if has_next_page else "",
            event_argument=self.select_attr_or_default(document, "#__EVENTARGUMENT", "value"),
            event_validation=self.select_attr_or_default(document, "#__EVENTVALIDATION", "value"),
            view_state=self.select_attr(document, "#__VIEWSTATE", "value"),
            view_state_generator=self.select_attr_or_default(document, "#__VIEWSTATEGENERATOR", "value"),
        )
        too_many_results = self.has_element(document, TOO_MANY_RESULTS_BANNER)
        if too_many_results:
            logger.warning("Search matched more than the 1000 results the catalog will return")

        pagination = SearchPagePaginationMeta(
            has_next_page=has_next_page,
            too_many_results=too_many_results,
            **self.extract_summary(document),
        )
        return SearchPageMeta(postback=postback, pagination=pagination)

    def extract_summary(self, document: BeautifulSoup) -> dict:
        """
        Read the "Updates: 1 - 25 of 93 (page 1 of 4)" summary when the page has one.

        Returns an empty dict when the summary is absent or unrecognised, which
        leaves the counters at their defaults.
        """
        summary = self.find_element(document, SEARCH_SUMMARY)
        if summary is None:
            return {}
        match = _SUMMARY_PATTERN.search(self.element_text(summary))
        if match is None:
            return {}
        first, last, total, page, pages = (int(group) for group in match.groups())
        return {
            'current_page': page,
            'page_size': last - first + 1,
            'page_count': pages,
            'result_count': total,
        }
