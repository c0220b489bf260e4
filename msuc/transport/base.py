"""
Base Transport Module

This module defines the abstract transports used to talk to the catalog.
A transport executes one fully formed RequestDescriptor and returns the
status code and body. It does not retry and does not judge the status code.
"""

from abc import ABC, abstractmethod

from ..models import RequestDescriptor, TransportResponse


class BaseTransport(ABC):
    """
    Abstract base class for blocking transports.
    """

    @abstractmethod
    def execute(self, request: RequestDescriptor) -> TransportResponse:
        """
        Execute a request.

        Args:
            request (RequestDescriptor): Method, URL and optional form body

        Returns:
            TransportResponse: Status code and raw body

        Raises:
            TransportError: If the request could not be completed
        """
        pass

    def close(self) -> None:
        """Release any resources held by the transport."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class AsyncBaseTransport(ABC):
    """
    Abstract base class for asynchronous transports.
    """

    @abstractmethod
    async def execute(self, request: RequestDescriptor) -> TransportResponse:
        """
        Execute a request.

        Args:
            request (RequestDescriptor): Method, URL and optional form body

        Returns:
            TransportResponse: Status code and raw body

        Raises:
            TransportError: If the request could not be completed
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the transport."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
