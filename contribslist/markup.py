"""
HTML output helpers.

Provides element builders with attribute escaping, LinkRenderer for links to
wiki pages, and list_to_text for English comma/"and" joining of items.
"""

from html import escape
from typing import Mapping, Optional, Sequence
from urllib.parse import quote, urlencode

from contribslist.titles import Title


def _attributes(attrs: Optional[Mapping[str, str]]) -> str:
    if not attrs:
        return ""
    return "".join(
        f' {name}="{escape(str(value), quote=True)}"'
        for name, value in attrs.items()
        if value is not None
    )


def open_element(tag: str, attrs: Optional[Mapping[str, str]] = None) -> str:
    return f"<{tag}{_attributes(attrs)}>"


def close_element(tag: str) -> str:
    return f"</{tag}>"


def raw_element(tag: str, attrs: Optional[Mapping[str, str]] = None, contents: Optional[str] = "") -> str:
    """Wrap already-escaped HTML contents in an element."""
    return open_element(tag, attrs) + (contents or "") + close_element(tag)


def element(tag: str, attrs: Optional[Mapping[str, str]] = None, text: str = "") -> str:
    """Wrap plain text in an element, escaping it."""
    return raw_element(tag, attrs, escape(text or "", quote=False))


# Characters left unencoded in page URLs, as wfUrlencode does
URL_SAFE = ";@$!*(),/:~"


class LinkRenderer:
    """
    Renders links to wiki pages.

    Args:
        server: Server URL, e.g. "https://en.wikipedia.org" ("" for relative links)
        article_path: Pretty URL path with a $1 placeholder, e.g. "/wiki/$1"
        script_path: Path of index.php's directory, e.g. "/w"
    """

    def __init__(self, server: str = "", article_path: str = "/wiki/$1", script_path: str = "/w"):
        self.server = server.rstrip("/")
        self.article_path = article_path
        self.script_path = script_path.rstrip("/")

    @classmethod
    def from_site(cls, site, server: str = "") -> "LinkRenderer":
        """Build from an mwclient Site's siteinfo (server, articlepath, scriptpath)."""
        general = site.site or {}
        return cls(
            server=server or general.get("server", ""),
            article_path=general.get("articlepath", "/wiki/$1"),
            script_path=general.get("scriptpath", "/w"),
        )

    def get_local_url(self, title: Title, query: Optional[Mapping[str, str]] = None) -> str:
        dbkey = quote(title.get_prefixed_dbkey(), safe=URL_SAFE)
        if query:
            return f"{self.server}{self.script_path}/index.php?title={dbkey}&{urlencode(query)}"
        return self.server + self.article_path.replace("$1", dbkey)

    def make_link(self, title: Title, text: Optional[str] = None,
                  attrs: Optional[Mapping[str, str]] = None,
                  query: Optional[Mapping[str, str]] = None) -> str:
        """
        Render an <a> element pointing at title.

        Args:
            title: Target page
            text: Link text (escaped); defaults to the prefixed title
            attrs: Extra attributes, e.g. {"class": "..."}
            query: Query string parameters, e.g. {"redirect": "no"}
        """
        link_attrs = {
            "href": self.get_local_url(title, query),
            "title": title.get_prefixed_text(),
        }
        link_attrs.update(attrs or {})
        return element("a", link_attrs, title.get_prefixed_text() if text is None else text)


def list_to_text(items: Sequence[str]) -> str:
    """
    Join items as English prose: "a", "a and b", "a, b and c".
    """
    items = list(items)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + " and " + items[-1]


__all__ = [
    'open_element',
    'close_element',
    'raw_element',
    'element',
    'LinkRenderer',
    'list_to_text',
]
