"""Conversions from raw catalog text to typed values."""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from ..exceptions import ParseError
from ..models import RebootBehavior

NOT_AVAILABLE = "n/a"

_REBOOT_BEHAVIORS = {behavior.value: behavior for behavior in RebootBehavior}
_MB_NUMBER = re.compile(r"[0-9]+(\.[0-9]+)?")


def parse_update_date(text: str) -> date:
    try:
        return datetime.strptime(text, "%m/%d/%Y").date()
    except ValueError as e:
        raise ParseError(f"Failed to parse date from '{text}': {e}") from e


def parse_size_from_mb_string(text: str) -> int:
    """
    Convert a size such as ``"160.9 MB"`` to bytes.

    The catalog prints megabytes with a single decimal digit, so the value is
    truncated to tenths and scaled as fixed point: ``"160.9 MB"`` becomes
    ``1609 * 1024 * 1024 // 10``.
    """
    number = text.split(" ", 1)[0]
    # ASCII digits with an optional fraction, nothing else
    if not _MB_NUMBER.fullmatch(number):
        raise ParseError(f"Failed to parse size from MB string '{text}'")
    megabytes = Decimal(number)
    return int(megabytes * 10) * 1024 * 1024 // 10


def parse_yes_no_bool(text: str) -> bool:
    if text == "Yes":
        return True
    # the catalog leaves some of these fields blank
    if text in ("No", ""):
        return False
    raise ParseError(f"Failed to parse yes/no value from '{text}'")


def parse_reboot_behavior(text: str) -> RebootBehavior:
    try:
        return _REBOOT_BEHAVIORS[text]
    except KeyError:
        raise ParseError(f"Failed to parse reboot behavior from '{text}'") from None


def parse_optional_string(text: str) -> Optional[str]:
    if text == NOT_AVAILABLE:
        return None
    return text


def parse_kb_from_string(title: str) -> str:
    """Return the KB number embedded in an update title, e.g. ``KB5030524``."""
    _, marker, tail = title.rpartition("(KB")
    if not marker:
        raise ParseError(f"Failed to find KB number in title '{title}'")
    number, closing, _ = tail.partition(")")
    if not closing or not number:
        raise ParseError(f"Failed to parse KB number from title '{title}'")
    return f"KB{number}"


def parse_search_row_id(row_id: str) -> Tuple[str, str]:
    """Split a result row id such as ``<update id>_R3`` into (update id, row)."""
    parts = row_id.split("_R")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ParseError(f"Failed to parse row id from '{row_id}'")
    return parts[0], parts[1]


def parse_absolute_url(text: str) -> str:
    parsed = urlparse(text)
    if not parsed.scheme or not parsed.netloc:
        raise ParseError(f"Failed to parse absolute URL from '{text}'")
    return text


def clean_nested_div_text(text: str) -> str:
    """Keep the value line of a label/value div, which is always the last one."""
    return text.strip().split("\n")[-1].strip()


def split_nested_div_list(text: str) -> List[str]:
    items = []
    for line in text.split("\n"):
        line = line.strip()
        # skip the label line and the separators between items
        if not line or line == "," or line.endswith(":"):
            continue
        items.append(line)
    return items


def clean_string_with_newlines(text: str) -> str:
    """Collapse a multi-line string into one line of trimmed, space separated parts."""
    return " ".join(line.strip() for line in text.split("\n"))
