"""
msuc Transports Module

Transports execute a RequestDescriptor and return a TransportResponse:
- RequestsTransport: blocking transport built on requests
- PlaywrightTransport: asynchronous transport built on Playwright
"""

from .base import AsyncBaseTransport, BaseTransport
from .playwright_transport import PlaywrightTransport
from .requests_transport import RequestsTransport
