"""
Client Configuration Module

This module holds the configuration shared by the clients and transports.
"""

from typing import Dict, Optional

from . import __version__

SEARCH_URL = "https://www.catalog.update.microsoft.com/Search.aspx"
UPDATE_URL = "https://www.catalog.update.microsoft.com/ScopedViewInline.aspx"


class ClientConfig:
    """
    Configuration class for the catalog clients.

    This class holds the endpoints and HTTP settings used when talking to the
    Microsoft Update Catalog.
    """

    def __init__(self,
                 search_url: str = SEARCH_URL,
                 update_url: str = UPDATE_URL,
                 user_agent: Optional[str] = None,
                 timeout: float = 30,
                 extra_headers: Optional[Dict[str, str]] = None,
                 ignore_https_errors: bool = False,
                 proxy: Optional[str] = None,
                 debug: bool = False):
        """
        Initialize client configuration.

        Args:
            search_url (str): Search page endpoint
            update_url (str): Update details endpoint, queried with ``updateid``
            user_agent (Optional[str]): User agent sent with every request
            timeout (float): Request timeout in seconds
            extra_headers (Optional[Dict[str, str]]): Additional HTTP headers
            ignore_https_errors (bool): Skip TLS certificate verification
            proxy (Optional[str]): Proxy server to route requests through
            debug (bool): Enable debug logging
        """
        self.search_url = search_url
        self.update_url = update_url
        self.user_agent = user_agent or f"msuc-py/{__version__}"
        self.timeout = timeout
        self.extra_headers = dict(extra_headers or {})
        self.ignore_https_errors = ignore_https_errors
        self.proxy = proxy
        self.debug = debug

    def headers(self) -> Dict[str, str]:
        """Return the headers sent with every request."""
        headers = {'User-Agent': self.user_agent}
        headers.update(self.extra_headers)
        return headers
