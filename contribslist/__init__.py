"""
contribslist - lists of a wiki user's contributions.

This package renders the pages a user contributed to, optionally filtered by
category, by whether the edit created the page, and by date range, as an HTML
list. The rows come from the wiki's replica database; the output is exposed
through the #contributionslist parser function.
"""

from contribslist.config import Config
from contribslist.constants import LIST_CLASS, PARSER_FUNCTION_NAME, TITLE_CLASS, VALID_FORMATS
from contribslist.contributions import ContributionsList
from contribslist.database import ReplicaDatabase, connect_replica
from contribslist.errors import ConfigError, ContribsListError, MalformedTitleError
from contribslist.markup import LinkRenderer, list_to_text
from contribslist.parser_function import (
    ParserFunctionResult,
    contributionslist_parser_function,
    extract_options,
)
from contribslist.permissions import Viewer, fetch_viewer
from contribslist.query import ContributionType, ContributionsQuery, QueryInfo, to_sql
from contribslist.timestamp import end_of_day_timestamp, parse_date, start_timestamp, to_mw_timestamp
from contribslist.titles import NamespaceInfo, Title

__all__ = [
    # config
    'Config',
    # constants
    'LIST_CLASS',
    'PARSER_FUNCTION_NAME',
    'TITLE_CLASS',
    'VALID_FORMATS',
    # contributions
    'ContributionsList',
    # database
    'ReplicaDatabase',
    'connect_replica',
    # errors
    'ConfigError',
    'ContribsListError',
    'MalformedTitleError',
    # markup
    'LinkRenderer',
    'list_to_text',
    # parser function
    'ParserFunctionResult',
    'contributionslist_parser_function',
    'extract_options',
    # permissions
    'Viewer',
    'fetch_viewer',
    # query
    'ContributionType',
    'ContributionsQuery',
    'QueryInfo',
    'to_sql',
    # timestamp
    'end_of_day_timestamp',
    'parse_date',
    'start_timestamp',
    'to_mw_timestamp',
    # titles
    'NamespaceInfo',
    'Title',
]
