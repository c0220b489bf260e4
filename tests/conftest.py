"""
Shared fixtures: catalog HTML pages and in-memory transports.
"""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from msuc.exceptions import TransportError
from msuc.models import RequestDescriptor, TransportResponse
from msuc.transport.base import AsyncBaseTransport, BaseTransport

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


class FakeTransport(BaseTransport):
    """Replays canned responses and records every request it receives."""

    def __init__(self, responses: List[TransportResponse]):
        self.responses = list(responses)
        self.requests: List[RequestDescriptor] = []
        self.closed = False

    def execute(self, request: RequestDescriptor) -> TransportResponse:
        self.requests.append(request)
        if not self.responses:
            raise TransportError("no more canned responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


class FakeAsyncTransport(AsyncBaseTransport):
    def __init__(self, responses: List[TransportResponse]):
        self.sync = FakeTransport(responses)

    @property
    def requests(self) -> List[RequestDescriptor]:
        return self.sync.requests

    @property
    def closed(self) -> bool:
        return self.sync.closed

    async def execute(self, request: RequestDescriptor) -> TransportResponse:
        return self.sync.execute(request)

    async def close(self) -> None:
        self.sync.close()


def html_response(name: str, status: int = 200, url: str = "") -> TransportResponse:
    return TransportResponse(status=status, body=read_fixture(name), url=url)


@pytest.fixture
def load_fixture():
    """Return a loader for the HTML pages under tests/fixtures."""
    return read_fixture


@pytest.fixture
def make_transport():
    def factory(*names: str, statuses: Optional[Dict[str, int]] = None) -> FakeTransport:
        statuses = statuses or {}
        return FakeTransport([html_response(name, statuses.get(name, 200)) for name in names])
    return factory


@pytest.fixture
def make_async_transport():
    def factory(*names: str) -> FakeAsyncTransport:
        return FakeAsyncTransport([html_response(name) for name in names])
    return factory
