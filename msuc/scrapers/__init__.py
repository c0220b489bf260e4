"""
msuc Scrapers Module

This module provides the scrapers for the Microsoft Update Catalog pages:
- SearchResultsScraper: search results page parser
- UpdateDetailsScraper: update details page parser
"""

from .search_scraper import SearchResultsScraper
from .update_scraper import UpdateDetailsScraper
