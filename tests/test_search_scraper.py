"""
Tests for scrapers/search_scraper.py - SearchResultsScraper

Tests parsing of saved search result pages.
"""

from datetime import date

import pytest

from msuc.exceptions import CatalogError, ParseError
from msuc.models import SearchResult
from msuc.scrapers.search_scraper import NEXT_PAGE_EVENT_TARGET, SearchResultsScraper

SMALL_RESULT_VIEW_STATE = (
    "DtvCw7CUghnhBGgbfav9RD2sZnSOF92wDmaidSdOktu2MfK8l+xXHa2OKgbE/aJafDdu5F03xf/3uBprEVSoP2LJzKBPQTQr3gWPNHK"
    "ihHM4UGQnBiQqV5jLOEb+DodJGXWWcMaq5SLqgv6elLxDwPFg7KSu8TgQlBhpW79OWwA="
)


@pytest.fixture
def scraper():
    return SearchResultsScraper()


class TestValidSearchResults:
    def test_small_result_page(self, scraper, load_fixture):
        page = scraper.extract(load_fixture("search_small_result.html"))

        assert page is not None
        meta, results = page
        assert results == [
            SearchResult(
                title="Security Update For Exchange Server 2019 CU12 (KB5030524)",
                id="56a97db8-1478-4860-a935-7996c78d10be",
                kb="KB5030524",
                product="Exchange Server 2019",
                classification="Security Updates",
                last_modified=date(2023, 8, 15),
                version=None,
                size=168715878,
            ),
            SearchResult(
                title="Security Update For Exchange Server 2019 CU13 (KB5030524)",
                id="70c08420-a012-4f5b-9b48-95a6b177d34a",
                kb="KB5030524",
                product="Exchange Server 2019",
                classification="Security Updates",
                last_modified=date(2023, 8, 15),
                version=None,
                size=168715878,
            ),
            SearchResult(
                title="Security Update For Exchange Server 2016 CU23 (KB5030524)",
                id="a08b526d-3947-4ddd-ba72-a8244b39c611",
                kb="KB5030524",
                product="Exchange Server 2016",
                classification="Security Updates",
                last_modified=date(2023, 8, 15),
                version=None,
                size=165045862,
            ),
        ]
        assert meta.postback.view_state == SMALL_RESULT_VIEW_STATE
        assert meta.postback.event_target == ""
        assert meta.postback.event_argument == ""
        assert meta.postback.event_validation == ""
        assert meta.postback.view_state_generator == ""
        assert meta.pagination.has_next_page is False
        assert meta.pagination.too_many_results is False
        assert meta.pagination.result_count == 3
        assert meta.pagination.page_count == 1

    def test_ids_starting_with_a_digit(self, scraper, load_fixture):
        meta, results = scraper.extract(load_fixture("search_double_digit_rows.html"))

        assert [r.id for r in results] == [
            "97fcb38d-dcb2-41e7-b75b-96327b676926",
            "0aec0f4e-5228-4f59-bfc4-08e3c3cd32bb",
            "c0e5f33a-0509-4891-9935-438d061b806e",
            "1e3b4e94-a544-4137-8fba-8ae1a2853a95",
        ]
        digit_row = results[1]
        assert digit_row.title == (
            "2023-09 Dynamic Cumulative Update for Windows 10 Version 21H2 for x64-based Systems (KB5030211)"
        )
        assert digit_row.kb == "KB5030211"
        assert digit_row.size == 785697996
        assert digit_row.last_modified == date(2023, 9, 12)
        assert results[2].product == "Windows 10 LTSB, Windows 10,  version 1903 and later"
        assert results[3].version == "10.0.19041.3448"
        assert results[3].size == 439772774
        # no summary on this page
        assert meta.pagination.result_count == 0
        assert meta.pagination.current_page == 0

    def test_next_page(self, scraper, load_fixture):
        meta, results = scraper.extract(load_fixture("search_with_next_page.html"))

        assert len(results) == 2
        assert meta.postback.event_target == NEXT_PAGE_EVENT_TARGET == "ctl00$catalogBody$nextPageLinkText"
        assert meta.postback.event_argument == ""
        assert meta.postback.event_validation.startswith("Q57xOoxbkNk6CIlyl8ZPyh")
        assert meta.postback.view_state.startswith("qBgftcgcDrC2nib27koiUf")
        assert meta.postback.view_state_generator == "BBBC20B8"
        assert meta.pagination.has_next_page is True
        assert meta.pagination.too_many_results is False
        assert meta.pagination.current_page == 1
        assert meta.pagination.page_count == 4
        assert meta.pagination.page_size == 25
        assert meta.pagination.result_count == 93

    def test_too_many_results(self, scraper, load_fixture):
        meta, results = scraper.extract(load_fixture("search_too_many_results.html"))

        assert len(results) == 1
        assert meta.pagination.too_many_results is True
        assert meta.pagination.has_next_page is True
        assert meta.pagination.result_count == 1000
        assert meta.pagination.page_count == 40

    def test_last_page_has_results_but_no_next_page(self, scraper, load_fixture):
        page = scraper.extract(load_fixture("search_last_page.html"))

        assert page is not None
        meta, results = page
        assert len(results) == 1
        assert meta.pagination.has_next_page is False
        assert meta.postback.event_target == ""
        assert meta.pagination.current_page == 2

    def test_parsing_is_repeatable(self, scraper, load_fixture):
        html = load_fixture("search_with_next_page.html")
        assert scraper.extract(html) == scraper.extract(html)


class TestEmptyAndErrorPages:
    def test_no_rows_returns_none(self, scraper, load_fixture):
        assert scraper.extract(load_fixture("search_no_results.html")) is None

    def test_hidden_error_page(self, scraper, load_fixture):
        with pytest.raises(CatalogError) as excinfo:
            scraper.extract(load_fixture("search_error_500.html"))

        assert excinfo.value.code == "8DDD0010"
        assert str(excinfo.value) == (
            "Microsoft Update Catalog error: received 500 error from Microsoft Update Catalog, code: 8DDD0010"
        )

    def test_hidden_error_without_rows(self, scraper):
        html = '<html><body><div id="errorPageDisplayedError">[Error number: 80072EE2]</div></body></html>'
        with pytest.raises(CatalogError) as excinfo:
            scraper.extract(html)
        assert excinfo.value.code == "80072EE2"

    def test_error_code_surrounded_by_text(self, scraper):
        html = (
            '<html><body><div id="errorPageDisplayedError">'
            "Something went wrong [Error number: 8DDD0010] see help"
            "</div></body></html>"
        )
        with pytest.raises(CatalogError) as excinfo:
            scraper.extract(html)
        assert excinfo.value.code == "8DDD0010"


class TestMalformedPages:
    def test_missing_view_state(self, scraper, load_fixture):
        html = load_fixture("search_small_result.html").replace('id="__VIEWSTATE"', 'id="__SOMETHINGELSE"')
        with pytest.raises(ParseError, match="__VIEWSTATE"):
            scraper.extract(html)

    def test_missing_row_id(self, scraper, load_fixture):
        html = load_fixture("search_small_result.html").replace(
            '<tr id="56a97db8-1478-4860-a935-7996c78d10be_R1">', "<tr>"
        )
        with pytest.raises(ParseError, match="id attribute"):
            scraper.extract(html)

    def test_malformed_row_id(self, scraper, load_fixture):
        html = load_fixture("search_small_result.html").replace(
            '<tr id="56a97db8-1478-4860-a935-7996c78d10be_R1">',
            '<tr id="56a97db8-1478-4860-a935-7996c78d10be-1">',
        )
        with pytest.raises(ParseError, match="row id"):
            scraper.extract(html)

    def test_title_without_kb(self, scraper, load_fixture):
        html = load_fixture("search_small_result.html").replace(
            "Security Update For Exchange Server 2016 CU23 (KB5030524)",
            "Security Update For Exchange Server 2016 CU23",
        )
        with pytest.raises(ParseError, match="KB number"):
            scraper.extract(html)

    def test_missing_cell(self, scraper, load_fixture):
        html = load_fixture("search_small_result.html").replace(
            'id="70c08420-a012-4f5b-9b48-95a6b177d34a_C4_R2"', 'id="somethingelse"'
        )
        with pytest.raises(ParseError, match="LAST_UPDATED"):
            scraper.extract(html)
