"""
The #contributionslist parser function.

Called with the form:

    {{#contributionslist:
       user=username | category=categoryname | type=createonly/notcreate/all |
       format=plain/ol/ul | datefrom=fromdate | dateto=todate }}

The output is HTML that must not be parsed again as wikitext.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from contribslist.constants import PARSER_FUNCTION_NAME
from contribslist.contributions import ContributionsList
from contribslist.markup import LinkRenderer
from contribslist.permissions import Viewer
from contribslist.titles import NamespaceInfo


log = logging.getLogger(__name__)

ARGUMENT_NAMES = ("user", "category", "type", "format", "datefrom", "dateto")


@dataclass
class ParserFunctionResult:
    """Parser function output and the flags telling the parser how to treat it."""
    text: str
    noparse: bool = True
    is_html: bool = True


def extract_options(options: Iterable[str]) -> Dict[str, str]:
    """
    Convert values in the form "name=value" into a dict of name -> value.

    Names are lowercased; names and values are trimmed. Values without an "="
    are ignored, and a later duplicate name overrides an earlier one.
    """
    results: Dict[str, str] = {}
    for option in options:
        name, sep, value = (option or "").partition("=")
        if not sep:
            continue
        results[name.strip().lower()] = value.strip()
    return results


def contributionslist_parser_function(args: Iterable[str], *, db,
                                      viewer: Optional[Viewer] = None,
                                      link_renderer: Optional[LinkRenderer] = None,
                                      namespaces: Optional[NamespaceInfo] = None) -> ParserFunctionResult:
    """
    Render {{#contributionslist: ...}} for the given arguments.

    Args:
        args: The "name=value" arguments of the call
        db: A ReplicaDatabase
        viewer: The user viewing the page
        link_renderer: Renders links to the listed pages
        namespaces: Namespace names for titles

    Returns:
        ParserFunctionResult with raw HTML
    """
    params = extract_options(args)
    unknown = set(params) - set(ARGUMENT_NAMES)
    if unknown:
        log.debug("Ignoring unknown #%s arguments: %s", PARSER_FUNCTION_NAME, ", ".join(sorted(unknown)))

    contributions_list = ContributionsList(
        params.get("user", ""),
        params.get("category", ""),
        params.get("type", ""),
        params.get("datefrom", ""),
        params.get("dateto", ""),
        db=db,
        viewer=viewer,
        link_renderer=link_renderer,
        namespaces=namespaces,
    )
    output = contributions_list.get_contributions_list(params.get("format", ""))
    return ParserFunctionResult(output)


__all__ = [
    'ARGUMENT_NAMES',
    'ParserFunctionResult',
    'extract_options',
    'contributionslist_parser_function',
]
