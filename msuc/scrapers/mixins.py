"""Mixins providing shared functionality for scrapers."""

from typing import List, Optional, Union

import soupsieve
from bs4 import BeautifulSoup, Tag

from ..exceptions import ParseError
from ..utils.value_parsers import clean_nested_div_text, split_nested_div_list

Node = Union[BeautifulSoup, Tag]


class HTMLExtractorMixin:
    """Mixin providing common HTML extraction methods."""

    @staticmethod
    def parse_document(content: str) -> BeautifulSoup:
        return BeautifulSoup(content, 'lxml')

    @staticmethod
    def element_text(element: Tag) -> str:
        """Return all text under an element, trimmed."""
        return element.get_text().strip()

    @staticmethod
    def find_element(node: Node, path: str) -> Optional[Tag]:
        """
        Return the first element matching a CSS selector, or None.

        Args:
            node: Document or element to search under
            path: CSS selector

        Raises:
            ParseError: If the selector does not compile
        """
        try:
            return node.select_one(path)
        except soupsieve.SelectorSyntaxError as e:
            raise ParseError(f"Invalid selector '{path}': {e}") from e

    @classmethod
    def find_all_elements(cls, node: Node, path: str) -> List[Tag]:
        try:
            return node.select(path)
        except soupsieve.SelectorSyntaxError as e:
            raise ParseError(f"Invalid selector '{path}': {e}") from e

    @classmethod
    def has_element(cls, node: Node, path: str) -> bool:
        return cls.find_element(node, path) is not None

    @classmethod
    def select_text(cls, node: Node, path: str) -> str:
        """
        Return the trimmed text of the first element matching ``path``.

        Raises:
            ParseError: If no element matches
        """
        element = cls.find_element(node, path)
        if element is None:
            raise ParseError(f"Failed to find element with selector '{path}'")
        return cls.element_text(element)

    @classmethod
    def select_attr(cls, node: Node, path: str, attr: str) -> str:
        """
        Return an attribute of the first element matching ``path``.

        Raises:
            ParseError: If the element or the attribute is missing
        """
        element = cls.find_element(node, path)
        if element is None:
            raise ParseError(f"Failed to find element with selector '{path}'")
        value = element.get(attr)
        if value is None:
            raise ParseError(f"Failed to find attribute '{attr}' for element '{path}'")
        return value

    @classmethod
    def select_attr_or_default(cls, node: Node, path: str, attr: str, default: str = '') -> str:
        try:
            return cls.select_attr(node, path, attr)
        except ParseError:
            return default

    @classmethod
    def select_nested_text(cls, node: Node, path: str) -> str:
        """Return the value line of a label/value block."""
        return clean_nested_div_text(cls.select_text(node, path))

    @classmethod
    def select_nested_list(cls, node: Node, path: str) -> List[str]:
        """Return the items of a label/value block listing several values."""
        return split_nested_div_list(cls.select_text(node, path))
