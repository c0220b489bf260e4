"""
Row Selector Module

Search result cells carry ids of the form ``{update id}_C{column}_R{row}``.
Update ids are GUIDs, and a GUID that starts with a digit is not a valid bare
CSS identifier, so the leading digit has to be escaped before the id can be
used in an ``#id`` selector.
"""

from enum import IntEnum

import soupsieve
from bs4 import Tag

from ..exceptions import ParseError


class SearchResColumn(IntEnum):
    """Columns of the search results table, numbered as in the cell ids."""

    TITLE = 1
    PRODUCT = 2
    CLASSIFICATION = 3
    LAST_UPDATED = 4
    VERSION = 5
    SIZE = 6


def escape_css_identifier(identifier: str) -> str:
    """
    Escape an identifier for use in a CSS id selector.

    A leading digit is replaced by its code point escape followed by a space,
    so ``0aec0f4e-...`` becomes ``\\30 aec0f4e-...``. Any other identifier is
    returned unchanged.

    Raises:
        ParseError: If the identifier is empty
    """
    if not identifier:
        raise ParseError("the update id is empty")
    first = identifier[0]
    if first.isdigit():
        return f"\\{ord(first):x} {identifier[1:]}"
    return identifier


def build_row_selector(column: SearchResColumn, update_id: str, row_id: str) -> soupsieve.SoupSieve:
    """
    Compile the selector for one cell of a search results row.

    Args:
        column: Logical column of the cell
        update_id: Update id taken from the row id
        row_id: Row index taken from the row id

    Returns:
        The compiled selector

    Raises:
        ParseError: If the update id is empty or the selector does not compile
    """
    if not update_id:
        raise ParseError(f"the update id is empty for column '{column.name}', row '{row_id}'")
    path = f"td#{escape_css_identifier(update_id)}_C{column.value}_R{row_id}"
    try:
        return soupsieve.compile(path)
    except soupsieve.SelectorSyntaxError as e:
        raise ParseError(
            f"invalid selector '{path}' for id '{update_id}', column '{column.name}', row '{row_id}': {e}"
        ) from e


def get_search_row_text(row: Tag, column: SearchResColumn, update_id: str, row_id: str) -> str:
    selector = build_row_selector(column, update_id, row_id)
    cell = selector.select_one(row)
    if cell is None:
        raise ParseError(
            f"no result for id '{update_id}', column '{column.name}', row '{row_id}' "
            f"with selector '{selector.pattern}'"
        )
    return cell.get_text().strip()
