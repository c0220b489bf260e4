"""
Requests Transport Module

Blocking transport built on a requests Session.
"""

import logging
from typing import Optional

import requests

from ..config import ClientConfig
from ..exceptions import TransportError
from ..models import RequestDescriptor, TransportResponse
from .base import BaseTransport


class RequestsTransport(BaseTransport):
    """
    Blocking transport using requests.

    One Session is kept for the lifetime of the transport so connections are
    reused across the pages of a search.
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize the transport.

        Args:
            config (Optional[ClientConfig]): Timeout, headers and TLS settings
            session (Optional[requests.Session]): Session to use instead of a new one
        """
        self.config = config or ClientConfig()
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(logging.DEBUG if self.config.debug else logging.INFO)
        self.session = session or requests.Session()
        self.session.headers.update(self.config.headers())
        self.session.verify = not self.config.ignore_https_errors
        if self.config.proxy:
            self.session.proxies.update({'http': self.config.proxy, 'https': self.config.proxy})

    def execute(self, request: RequestDescriptor) -> TransportResponse:
        self.logger.debug(f"{request.method} {request.url}")
        try:
            response = self.session.request(
                request.method,
                request.url,
                data=request.form,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            self.logger.error(f"Request to {request.url} failed: {str(e)}")
            raise TransportError(f"request error: {request.method} {request.url} ({e})") from e
        return TransportResponse(status=response.status_code, body=response.text, url=response.url)

    def close(self) -> None:
        self.session.close()
