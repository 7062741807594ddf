"""
Page titles and namespaces.

Provides the Title class, which normalizes user-supplied page names the way
MediaWiki does (namespace prefix, underscores, first-letter capitalization),
and NamespaceInfo, which maps namespace ids to their names.
"""

import logging
import re
from typing import Dict, Mapping, Optional

import mwclient

from contribslist.constants import NS_MAIN
from contribslist.errors import MalformedTitleError


log = logging.getLogger(__name__)


# Canonical English namespace names for a default installation
DEFAULT_NAMESPACES = {
    -2: "Media",
    -1: "Special",
    0: "",
    1: "Talk",
    2: "User",
    3: "User talk",
    4: "Project",
    5: "Project talk",
    6: "File",
    7: "File talk",
    8: "MediaWiki",
    9: "MediaWiki talk",
    10: "Template",
    11: "Template talk",
    12: "Help",
    13: "Help talk",
    14: "Category",
    15: "Category talk",
}

# Characters MediaWiki never allows in a title
ILLEGAL_TITLE_RE = re.compile(r"[#<>\[\]|{}\x00-\x1f\x7f]")


class NamespaceInfo:
    """
    Maps namespace ids to names and back.

    Lookups by name accept the local name, any alias, and the canonical
    English name, so "Category:" works on every wiki.

    Args:
        names: Mapping of namespace id -> display name ("" for the main namespace)
        aliases: Extra name -> namespace id mappings (canonical names, aliases)
    """

    def __init__(self, names: Optional[Mapping[int, str]] = None,
                 aliases: Optional[Mapping[str, int]] = None):
        self.names: Dict[int, str] = dict(DEFAULT_NAMESPACES if names is None else names)
        self.names.setdefault(NS_MAIN, "")
        # Local names win over aliases, aliases over canonical English names
        self._ids = {self._key(name): ns for ns, name in DEFAULT_NAMESPACES.items() if name}
        for name, ns in (aliases or {}).items():
            if name:
                self._ids[self._key(name)] = int(ns)
        for ns, name in self.names.items():
            if name:
                self._ids[self._key(name)] = ns

    @staticmethod
    def _key(name: str) -> str:
        return name.replace("_", " ").strip().lower()

    @classmethod
    def from_site(cls, site) -> "NamespaceInfo":
        """
        Build from an mwclient Site.

        Reads local names, canonical names and aliases from siteinfo. If the
        request fails or returns no namespaces, falls back to site.namespaces
        (id -> local name).
        """
        try:
            resp = site.api("query", meta="siteinfo", siprop="namespaces|namespacealiases")
        except mwclient.errors.APIError as api_error:
            log.error("Failed to fetch namespace info: %s", api_error)
            resp = None

        query = (resp.get("query") or {}) if isinstance(resp, dict) else {}
        namespaces = query.get("namespaces") or {}
        if not namespaces:
            return cls({int(ns): name for ns, name in site.namespaces.items()})

        names: Dict[int, str] = {}
        aliases: Dict[str, int] = {}
        for info in namespaces.values():
            ns = int(info["id"])
            # formatversion=1 puts the local name under "*"
            names[ns] = info.get("name", info.get("*", ""))
            if info.get("canonical"):
                aliases[info["canonical"]] = ns
        for alias in query.get("namespacealiases") or []:
            name = alias.get("alias", alias.get("*", ""))
            if name:
                aliases[name] = int(alias["id"])
        return cls(names, aliases)

    def get_name(self, namespace: int) -> str:
        return self.names.get(namespace, "")

    def get_id(self, name: str) -> Optional[int]:
        return self._ids.get(self._key(name))


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


class Title:
    """
    A normalized page title: a namespace id plus a database key
    (underscores instead of spaces, first letter upper-cased).
    """

    def __init__(self, namespace: int, dbkey: str, namespaces: Optional[NamespaceInfo] = None,
                 page_id: int = 0, redirect: bool = False):
        self.namespace = namespace
        self.dbkey = dbkey
        self.namespaces = namespaces or NamespaceInfo()
        self.page_id = page_id
        self.redirect = redirect

    @classmethod
    def new_from_text(cls, text: str, default_namespace: int = NS_MAIN,
                      namespaces: Optional[NamespaceInfo] = None) -> "Title":
        """
        Normalize a page name. A known namespace prefix overrides default_namespace,
        so both "Foo" and "Category:Foo" resolve to the same category.

        Raises:
            MalformedTitleError: If the title is empty or contains illegal characters
        """
        namespaces = namespaces or NamespaceInfo()
        dbkey = re.sub(r"[ _]+", "_", (text or "").strip()).strip("_")
        if dbkey.startswith(":"):
            dbkey = dbkey[1:].lstrip("_")
        namespace = default_namespace

        prefix, sep, rest = dbkey.partition(":")
        if sep:
            ns_id = namespaces.get_id(prefix)
            if ns_id is not None:
                namespace = ns_id
                dbkey = rest.lstrip("_")

        if not dbkey:
            raise MalformedTitleError(f"Empty title: {text!r}")
        if ILLEGAL_TITLE_RE.search(dbkey):
            raise MalformedTitleError(f"Title contains illegal characters: {text!r}")
        return cls(namespace, _capitalize(dbkey), namespaces=namespaces)

    @classmethod
    def new_from_row(cls, row: Mapping, namespaces: Optional[NamespaceInfo] = None) -> "Title":
        """
        Build a title from a page row (page_namespace, page_title, and optionally
        page_id and page_is_redirect).

        Raises:
            MalformedTitleError: If the row has no usable title
        """
        try:
            namespace = int(row["page_namespace"])
            dbkey = row["page_title"]
        except (KeyError, TypeError, ValueError) as error:
            raise MalformedTitleError(f"Row has no page title: {error}") from error
        if isinstance(dbkey, bytes):
            dbkey = dbkey.decode("utf-8")
        if not dbkey or ILLEGAL_TITLE_RE.search(dbkey):
            raise MalformedTitleError(f"Invalid page_title in row: {dbkey!r}")
        return cls(
            namespace,
            dbkey,
            namespaces=namespaces,
            page_id=int(row.get("page_id") or 0),
            redirect=bool(row.get("page_is_redirect")),
        )

    def get_dbkey(self) -> str:
        return self.dbkey

    def get_text(self) -> str:
        return self.dbkey.replace("_", " ")

    def get_namespace_text(self) -> str:
        return self.namespaces.get_name(self.namespace)

    def get_prefixed_text(self) -> str:
        ns_text = self.get_namespace_text()
        if ns_text:
            return f"{ns_text}:{self.get_text()}"
        return self.get_text()

    def get_prefixed_dbkey(self) -> str:
        return self.get_prefixed_text().replace(" ", "_")

    def is_redirect(self) -> bool:
        return self.redirect

    def __eq__(self, other):
        if not isinstance(other, Title):
            return NotImplemented
        return (self.namespace, self.dbkey) == (other.namespace, other.dbkey)

    def __hash__(self):
        return hash((self.namespace, self.dbkey))

    def __repr__(self):
        return f"Title({self.namespace}, {self.dbkey!r})"


def normalize_user_name(name: str) -> str:
    """User names are stored with spaces and an upper-cased first letter."""
    name = " ".join((name or "").replace("_", " ").split())
    return _capitalize(name)


__all__ = [
    'DEFAULT_NAMESPACES',
    'NamespaceInfo',
    'Title',
    'normalize_user_name',
]
