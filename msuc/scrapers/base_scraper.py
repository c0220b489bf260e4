"""
Base Scraper Module

This module defines the abstract base class for the catalog page scrapers.
Scrapers never fetch anything themselves: they receive the raw HTML returned
by a transport and turn it into typed records.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseScraper(ABC):
    """
    Abstract base class for all scraper implementations.

    This class defines the common interface that all scrapers must implement.
    """

    @abstractmethod
    def extract(self, content: str) -> Any:
        """
        Extract structured data from raw content.

        Args:
            content (str): Raw HTML to extract data from

        Returns:
            Any: The typed record(s) found in the content

        Raises:
            ParseError: If a required element is missing or malformed
        """
        pass
