"""
Update Details Scraper Module

This module parses the inline update details page of the Microsoft Update
Catalog into an Update record. Every field lives under a fixed element id;
a missing required element fails the whole parse.
"""

import logging
from typing import List

from bs4 import BeautifulSoup

from ..exceptions import ParseError
from ..models import SupersededByUpdate, SupersedesUpdate, Update
from ..utils.value_parsers import (
    NOT_AVAILABLE,
    clean_string_with_newlines,
    parse_absolute_url,
    parse_kb_from_string,
    parse_optional_string,
    parse_reboot_behavior,
    parse_size_from_mb_string,
    parse_update_date,
    parse_yes_no_bool,
)
from .base_scraper import BaseScraper
from .mixins import HTMLExtractorMixin

logger = logging.getLogger(__name__)

SUPERSEDES = "div#supersedesInfo div"
SUPERSEDED_BY = "div#supersededbyInfo div a"
UPDATE_LINK_PREFIX = "ScopedViewInline.aspx?updateid="


class UpdateDetailsScraper(HTMLExtractorMixin, BaseScraper):
    """Scraper for the update details page."""

    def extract(self, content: str) -> Update:
        """
        Parse an update details page.

        Args:
            content (str): Raw HTML of the details page

        Returns:
            Update: The parsed update

        Raises:
            ParseError: If any required field is missing or malformed
        """
        document = self.parse_document(content)

        update = Update(
            title=self.select_text(document, "#ScopedViewHandler_titleText"),
            id=self.select_text(document, "#ScopedViewHandler_UpdateID"),
            kb=f"KB{self.select_nested_text(document, 'div#kbDiv')}",
            classification=self.select_nested_text(document, "#classificationDiv"),
            last_modified=parse_update_date(self.select_text(document, "#ScopedViewHandler_date")),
            size=parse_size_from_mb_string(self.select_text(document, "#ScopedViewHandler_size")),
            description=self.select_text(document, "#ScopedViewHandler_desc"),
            architecture=parse_optional_string(self.select_nested_text(document, "#archDiv")),
            supported_products=self.select_nested_list(document, "#productsDiv"),
            supported_languages=self.select_nested_list(document, "#languagesDiv"),
            msrc_number=parse_optional_string(self.select_nested_text(document, "#securityBullitenDiv")),
            msrc_severity=parse_optional_string(self.select_text(document, "#ScopedViewHandler_msrcSeverity")),
            info_url=parse_absolute_url(self.select_text(document, "#moreInfoDiv a")),
            # the catalog misspells this id
            support_url=parse_absolute_url(self.select_text(document, "#suportUrlDiv a")),
            reboot_behavior=parse_reboot_behavior(self.select_text(document, "#ScopedViewHandler_rebootBehavior")),
            requires_user_input=parse_yes_no_bool(self.select_text(document, "#ScopedViewHandler_userInput")),
            is_exclusive_install=parse_yes_no_bool(
                self.select_text(document, "#ScopedViewHandler_installationImpact")
            ),
            requires_network_connectivity=parse_yes_no_bool(
                self.select_text(document, "#ScopedViewHandler_connectivity")
            ),
            uninstall_notes=parse_optional_string(
                clean_string_with_newlines(self.select_text(document, "#uninstallNotesDiv div"))
            ),
            uninstall_steps=parse_optional_string(self.select_text(document, "#uninstallStepsDiv div")),
            supersedes=self.extract_supersedes(document),
            superseded_by=self.extract_superseded_by(document),
        )
        logger.debug(f"Parsed update details for {update.id}")
        return update

    def extract_supersedes(self, document: BeautifulSoup) -> List[SupersedesUpdate]:
        supersedes = []
        for element in self.find_all_elements(document, SUPERSEDES):
            title = clean_string_with_newlines(self.element_text(element))
            # updates that replace nothing list a single "n/a" entry
            if title == NOT_AVAILABLE:
                continue
            supersedes.append(SupersedesUpdate(title=title, kb=parse_kb_from_string(title)))
        return supersedes

    def extract_superseded_by(self, document: BeautifulSoup) -> List[SupersededByUpdate]:
        superseded_by = []
        for link in self.find_all_elements(document, SUPERSEDED_BY):
            title = clean_string_with_newlines(self.element_text(link))
            href = link.get("href")
            if href is None:
                raise ParseError(f"Failed to find href attribute for superseded by update '{title}'")
            update_id = href.strip()
            if update_id.startswith(UPDATE_LINK_PREFIX):
                update_id = update_id[len(UPDATE_LINK_PREFIX):]
            superseded_by.append(SupersededByUpdate(
                title=title,
                kb=parse_kb_from_string(title),
                id=update_id,
            ))
        return superseded_by
