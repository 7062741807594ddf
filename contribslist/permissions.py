"""
Revision deletion bits and viewer rights.

The rev_deleted column is a bit field. Which revisions a viewer may see in a
contribution list depends on whether they hold the deletedhistory and
suppressrevision rights.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

import mwclient


log = logging.getLogger(__name__)

# rev_deleted bits
DELETED_TEXT = 1
DELETED_COMMENT = 2
DELETED_USER = 4
DELETED_RESTRICTED = 8
# Convenience combinations
SUPPRESSED_USER = DELETED_USER | DELETED_RESTRICTED
SUPPRESSED_ALL = DELETED_TEXT | DELETED_COMMENT | DELETED_USER | DELETED_RESTRICTED

# Rights consulted when building the query
RIGHT_DELETEDHISTORY = "deletedhistory"
RIGHT_SUPPRESSREVISION = "suppressrevision"


@dataclass(frozen=True)
class Viewer:
    """The user on whose behalf the list is rendered, with their rights."""
    name: str = ""
    rights: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def anonymous(cls) -> "Viewer":
        return cls(name="", rights=frozenset())

    @classmethod
    def with_rights(cls, name: str, rights: Iterable[str]) -> "Viewer":
        return cls(name=name, rights=frozenset(rights))

    def is_allowed(self, right: str) -> bool:
        return right in self.rights


def fetch_viewer(site: mwclient.Site) -> Viewer:
    """
    Read the logged-in user's name and rights from the API (meta=userinfo).

    Args:
        site: The mwclient Site connection

    Returns:
        Viewer for the current user, or an anonymous viewer if the request fails
    """
    try:
        resp = site.api("query", meta="userinfo", uiprop="rights")
    except mwclient.errors.APIError as api_error:
        log.error("Failed to fetch viewer rights: %s", api_error)
        return Viewer.anonymous()

    userinfo = ((resp or {}).get("query") or {}).get("userinfo") or {}
    if "anon" in userinfo:
        return Viewer.with_rights("", userinfo.get("rights") or [])
    viewer = Viewer.with_rights(userinfo.get("name") or "", userinfo.get("rights") or [])
    log.info("Rendering as %s (%d rights)", viewer.name or "anonymous", len(viewer.rights))
    return viewer


__all__ = [
    'DELETED_TEXT',
    'DELETED_COMMENT',
    'DELETED_USER',
    'DELETED_RESTRICTED',
    'SUPPRESSED_USER',
    'SUPPRESSED_ALL',
    'RIGHT_DELETEDHISTORY',
    'RIGHT_SUPPRESSREVISION',
    'Viewer',
    'fetch_viewer',
]
