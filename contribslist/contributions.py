"""
Contribution lists.

Provides ContributionsList, which runs the contributions query for a user and
renders the resulting pages as an ordered list, an unordered list, or plain
comma-separated text.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from contribslist.constants import DEFAULT_FORMAT, LIST_CLASS, TITLE_CLASS, VALID_FORMATS
from contribslist.errors import MalformedTitleError
from contribslist.markup import LinkRenderer, close_element, list_to_text, open_element, raw_element
from contribslist.permissions import Viewer
from contribslist.query import ContributionsQuery
from contribslist.titles import NamespaceInfo, Title


log = logging.getLogger(__name__)


class ContributionsList(ContributionsQuery):
    """
    A user's contributions, queried on construction and rendered on demand.

    Args:
        user: Username of the target
        category: Category name to restrict to
        type: "createonly", "notcreate", or anything else for all contributions
        date_from: Only show contributions on or after this date
        date_to: Only show contributions on or before this date
        db: A ReplicaDatabase (anything with find_actor_id() and select())
        viewer: The user the list is rendered for; defaults to anonymous
        link_renderer: Renders links to the listed pages
        namespaces: Namespace names for titles
        language_list: Joins links for the plain format
    """

    def __init__(self, user: str, category: Optional[str] = None, type: Optional[str] = None,
                 date_from: Optional[str] = None, date_to: Optional[str] = None, *,
                 db, viewer: Optional[Viewer] = None,
                 link_renderer: Optional[LinkRenderer] = None,
                 namespaces: Optional[NamespaceInfo] = None,
                 language_list: Callable[[Sequence[str]], str] = list_to_text):
        super().__init__(user, category, type, date_from, date_to, viewer=viewer, namespaces=namespaces)
        self.db = db
        self.link_renderer = link_renderer or LinkRenderer()
        self.language_list = language_list
        self.result: List[Dict[str, Any]] = []

        self.do_query()

    def do_query(self) -> None:
        """Perform the db query, storing the rows in self.result."""
        self.result = []
        actor_id = self.db.find_actor_id(self.user) if self.user else None
        if not actor_id:
            # Without an actor there is nothing to list
            log.info("No contributions to list for user %r", self.user)
            return

        info = self.build_query_info(actor_id)
        self.result = list(self.db.select(info))
        log.info("Found %d contribution(s) by %s", len(self.result), self.user)

    def get_linked_title(self, row: Mapping[str, Any]) -> Optional[str]:
        """
        Generate the HTML link to the page of a revision row.

        Rows that are not valid revisions (no page, no current revision, or an
        unusable title) produce None.
        """
        try:
            latest = int(row.get("page_latest") or 0)
            page = Title.new_from_row(row, namespaces=self.namespaces)
        except (MalformedTitleError, TypeError, ValueError) as error:
            log.debug("Skipping row that is not a valid revision: %s", error)
            return None
        if not page.page_id or not latest:
            log.debug("Skipping row without a current revision: %r", page)
            return None

        return self.link_renderer.make_link(
            page,
            page.get_prefixed_text(),
            {"class": TITLE_CLASS},
            {"redirect": "no"} if page.is_redirect() else None,
        )

    def get_links(self) -> List[str]:
        links = []
        for row in self.result:
            link = self.get_linked_title(row)
            if link is not None:
                links.append(link)
        return links

    @staticmethod
    def get_valid_formats() -> List[str]:
        return list(VALID_FORMATS)

    def get_contributions_list(self, format: Optional[str]) -> str:
        """
        Get a list of contributions in the specified format.

        Args:
            format: "ol", "ul" or "plain" (case-insensitive); anything else gives "ul"

        Returns:
            HTML
        """
        format = (format or "").strip().lower()
        if format not in self.get_valid_formats():
            format = DEFAULT_FORMAT
        return getattr(self, f"get_contributions_list_{format}")()

    def get_contributions_list_ol(self) -> str:
        return self.get_contributions_list_list("ol")

    def get_contributions_list_ul(self) -> str:
        return self.get_contributions_list_list("ul")

    def get_contributions_list_list(self, list_type: str) -> str:
        """Wrap each link in <li> inside an ol or ul with the contributionslist class."""
        html = open_element(list_type, {"class": LIST_CLASS})
        for link in self.get_links():
            html += raw_element("li", None, link)
        html += close_element(list_type)
        return html

    def get_contributions_list_plain(self) -> str:
        """A comma-separated list with "and" before the final item."""
        return self.language_list(self.get_links())


__all__ = ['ContributionsList']
