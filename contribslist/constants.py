"""
Constants used throughout the contribslist codebase.

Centralizes schema names, CSS classes and output formats so the query builder,
the renderer and the parser function agree on them.
"""

# Name of the parser function, used as {{#contributionslist: ... }}
PARSER_FUNCTION_NAME = "contributionslist"

# Column used for ordering and for the date range bounds
INDEX_FIELD = "rev_timestamp"

# CSS classes on the rendered output
LIST_CLASS = "contributionslist"
TITLE_CLASS = "contributionslist-title"

# Output formats, the first unordered list being the fallback
VALID_FORMATS = ["ol", "ul", "plain"]
DEFAULT_FORMAT = "ul"

# Namespace ids used by the titles module
NS_MAIN = 0
NS_CATEGORY = 14

# Page fields selected alongside every revision
PAGE_FIELDS = [
    "page_namespace",
    "page_title",
    "page_is_new",
    "page_id",
    "page_latest",
    "page_is_redirect",
    "page_len",
]


__all__ = [
    'PARSER_FUNCTION_NAME',
    'INDEX_FIELD',
    'LIST_CLASS',
    'TITLE_CLASS',
    'VALID_FORMATS',
    'DEFAULT_FORMAT',
    'NS_MAIN',
    'NS_CATEGORY',
    'PAGE_FIELDS',
]
