"""
Playwright Transport Module

This module provides the asynchronous transport. It drives Playwright's
API request context, which speaks plain HTTP (no browser page is opened)
but shares Playwright's networking stack, proxy and TLS handling.
"""

import logging
from typing import Optional

from playwright.async_api import APIRequestContext, Error as PlaywrightError, Playwright, async_playwright

from ..config import ClientConfig
from ..exceptions import TransportError
from ..models import RequestDescriptor, TransportResponse
from .base import AsyncBaseTransport


class PlaywrightTransport(AsyncBaseTransport):
    """
    Asynchronous transport using Playwright.

    Used as an async context manager, one request context is started on
    entry and reused for every request until exit. Used bare, each request
    starts and tears down its own Playwright session.
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        """
        Initialize the Playwright transport.

        Args:
            config (Optional[ClientConfig]): Timeout, headers, proxy and TLS settings
        """
        self.config = config or ClientConfig()
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(logging.DEBUG if self.config.debug else logging.INFO)
        self.playwright: Optional[Playwright] = None
        self.request_context: Optional[APIRequestContext] = None

    async def __aenter__(self):
        await self.start()
        return self

    async def start(self) -> None:
        """Start Playwright and open the shared request context."""
        if self.request_context is not None:
            return
        self.playwright = await async_playwright().start()
        self.request_context = await self.create_context(self.playwright)
        self.logger.info("Playwright request context started.")

    async def create_context(self, playwright: Playwright) -> APIRequestContext:
        """
        Create a new request context with the configured settings.

        Args:
            playwright (Playwright): Playwright instance

        Returns:
            APIRequestContext: Created request context
        """
        return await playwright.request.new_context(
            user_agent=self.config.user_agent,
            extra_http_headers=self.config.extra_headers or None,
            ignore_https_errors=self.config.ignore_https_errors,
            proxy={'server': self.config.proxy} if self.config.proxy else None,
            timeout=self.config.timeout * 1000,
        )

    async def execute(self, request: RequestDescriptor) -> TransportResponse:
        if self.request_context is not None:
            return await self.send(self.request_context, request)

        async with async_playwright() as p:
            context = await self.create_context(p)
            try:
                return await self.send(context, request)
            finally:
                await context.dispose()

    async def send(self, context: APIRequestContext, request: RequestDescriptor) -> TransportResponse:
        """
        Send one request on the given context and read the whole body.

        Args:
            context (APIRequestContext): Request context to send on
            request (RequestDescriptor): Request to send

        Returns:
            TransportResponse: Status code and body

        Raises:
            TransportError: If Playwright fails to complete the request
        """
        self.logger.debug(f"{request.method} {request.url}")
        try:
            response = await context.fetch(
                request.url,
                method=request.method,
                form=request.form,
            )
            try:
                body = await response.text()
            finally:
                await response.dispose()
        except PlaywrightError as e:
            self.logger.error(f"Request to {request.url} failed: {str(e)}")
            raise TransportError(f"request error: {request.method} {request.url} ({e})") from e
        return TransportResponse(status=response.status, body=body, url=response.url)

    async def close(self) -> None:
        if self.request_context is not None:
            await self.request_context.dispose()
            self.request_context = None
        if self.playwright is not None:
            await self.playwright.stop()
            self.playwright = None
            self.logger.info("Playwright stopped.")
