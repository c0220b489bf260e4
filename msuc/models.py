"""
Data models for the Microsoft Update Catalog.

Records produced by the scrapers are frozen dataclasses. The only mutable
piece of the system is the search page state, and even that is replaced
wholesale by the pagination functions rather than edited field by field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SearchResult:
    """A single row of a catalog search."""

    title: str
    id: str
    kb: str
    product: str
    classification: str
    last_modified: date
    version: Optional[str]
    size: int


class RebootBehavior(Enum):
    """Restart behaviour of an update, keyed by the label the catalog prints."""

    REQUIRED = "Required"
    CAN_REQUEST = "Can request restart"
    RECOMMENDED = "Recommended"
    NOT_REQUIRED = "Not required"
    NEVER_RESTARTS = "Never restarts"


@dataclass(frozen=True)
class SupersedesUpdate:
    """An update replaced by the current one. The catalog shows no id for these."""

    title: str
    kb: str


@dataclass(frozen=True)
class SupersededByUpdate:
    """An update that replaces the current one."""

    title: str
    kb: str
    id: str


@dataclass(frozen=True)
class Update:
    """Full details of a single update."""

    title: str
    id: str
    kb: str
    classification: str
    last_modified: date
    size: int
    description: str
    architecture: Optional[str]
    supported_products: List[str]
    supported_languages: List[str]
    msrc_number: Optional[str]
    msrc_severity: Optional[str]
    info_url: str
    support_url: str
    reboot_behavior: RebootBehavior
    requires_user_input: bool
    is_exclusive_install: bool
    requires_network_connectivity: bool
    uninstall_notes: Optional[str]
    uninstall_steps: Optional[str]
    supersedes: List[SupersedesUpdate] = field(default_factory=list)
    superseded_by: List[SupersededByUpdate] = field(default_factory=list)


@dataclass(frozen=True)
class PostbackFields:
    """The five ASP.NET hidden fields echoed back to request the next page."""

    event_target: str = ""
    event_argument: str = ""
    event_validation: str = ""
    view_state: str = ""
    view_state_generator: str = ""

    def as_form(self) -> Dict[str, str]:
        return {
            "__EVENTTARGET": self.event_target,
            "__EVENTARGUMENT": self.event_argument,
            "__EVENTVALIDATION": self.event_validation,
            "__VIEWSTATE": self.view_state,
            "__VIEWSTATEGENERATOR": self.view_state_generator,
        }


@dataclass(frozen=True)
class SearchPagePaginationMeta:
    # has_next_page starts out true so the first page gets requested
    has_next_page: bool = True
    too_many_results: bool = False
    current_page: int = 0
    page_size: int = 0
    page_count: int = 0
    result_count: int = 0


@dataclass(frozen=True)
class SearchPageMeta:
    """State carried from one search page to the request for the next."""

    postback: PostbackFields = field(default_factory=PostbackFields)
    pagination: SearchPagePaginationMeta = field(default_factory=SearchPagePaginationMeta)


SearchPage = Tuple[SearchPageMeta, List[SearchResult]]


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully formed HTTP request handed to a transport."""

    method: str
    url: str
    form: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: str
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
