"""Tests for markup.py HTML helpers."""

from unittest.mock import MagicMock

from contribslist.markup import (
    LinkRenderer,
    close_element,
    element,
    list_to_text,
    open_element,
    raw_element,
)
from contribslist.titles import Title


class TestElements:
    """Tests for element builders."""

    def test_open_and_close(self):
        """Test opening and closing tags."""
        assert open_element("ul", {"class": "contributionslist"}) == '<ul class="contributionslist">'
        assert close_element("ul") == "</ul>"

    def test_attribute_escaping(self):
        """Test that attribute values are escaped."""
        assert open_element("a", {"title": 'Say "hi" & <bye>'}) == '<a title="Say &quot;hi&quot; &amp; &lt;bye&gt;">'

    def test_none_attributes_dropped(self):
        """Test that attributes set to None are left out."""
        assert open_element("li", {"class": None}) == "<li>"

    def test_raw_element_keeps_html(self):
        """Test that raw_element does not escape its contents."""
        assert raw_element("li", None, "<b>x</b>") == "<li><b>x</b></li>"

    def test_element_escapes_text(self):
        """Test that element escapes its text."""
        assert element("span", None, "a < b") == "<span>a &lt; b</span>"


class TestLinkRenderer:
    """Tests for page links."""

    def test_pretty_url(self):
        """Test links through the article path."""
        renderer = LinkRenderer("https://wiki.example.org/", "/wiki/$1", "/w/")
        assert renderer.get_local_url(Title(2, "Example")) == "https://wiki.example.org/wiki/User:Example"

    def test_query_uses_index_php(self):
        """Test that links with a query go through index.php."""
        renderer = LinkRenderer("", "/wiki/$1", "/w")
        url = renderer.get_local_url(Title(0, "Old_name"), {"redirect": "no"})
        assert url == "/w/index.php?title=Old_name&redirect=no"

    def test_non_ascii_is_percent_encoded(self):
        """Test that non-ASCII titles are percent-encoded in URLs."""
        renderer = LinkRenderer("", "/wiki/$1", "/w")
        assert renderer.get_local_url(Title(0, "Café")) == "/wiki/Caf%C3%A9"

    def test_make_link_default_text(self):
        """Test that the link text defaults to the prefixed title."""
        renderer = LinkRenderer("", "/wiki/$1", "/w")
        assert renderer.make_link(Title(14, "Living_people")) == (
            '<a href="/wiki/Category:Living_people" title="Category:Living people">Category:Living people</a>'
        )

    def test_from_site(self):
        """Test reading the server and paths from siteinfo."""
        site = MagicMock()
        site.site = {"server": "//de.wikipedia.org", "articlepath": "/wiki/$1", "scriptpath": "/w"}
        renderer = LinkRenderer.from_site(site)
        assert renderer.server == "//de.wikipedia.org"
        assert LinkRenderer.from_site(site, server="https://x.org").server == "https://x.org"


class TestListToText:
    """Tests for English list joining."""

    def test_empty(self):
        """Test an empty list."""
        assert list_to_text([]) == ""

    def test_one(self):
        """Test a single item."""
        assert list_to_text(["a"]) == "a"

    def test_two(self):
        """Test two items joined with "and"."""
        assert list_to_text(["a", "b"]) == "a and b"

    def test_many(self):
        """Test commas before the final "and"."""
        assert list_to_text(["a", "b", "c", "d"]) == "a, b, c and d"
