"""
Query building for user contributions.

Provides ContributionsQuery, which holds the filters of a contribution list
(target user, category, creation type and date range) and turns them into
table/field/condition/join structures over the MediaWiki schema, and
to_sql(), which assembles those structures into one parameterized SELECT.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from contribslist.constants import INDEX_FIELD, NS_CATEGORY, PAGE_FIELDS
from contribslist.errors import MalformedTitleError
from contribslist.permissions import (
    DELETED_USER,
    RIGHT_DELETEDHISTORY,
    RIGHT_SUPPRESSREVISION,
    SUPPRESSED_USER,
    Viewer,
)
from contribslist.timestamp import end_of_day_timestamp, start_timestamp
from contribslist.titles import NamespaceInfo, Title


log = logging.getLogger(__name__)

# A condition is either a raw SQL fragment or (column, operator, value),
# the value being passed to the driver as a parameter.
Condition = Union[str, Tuple[str, str, Any]]


class ContributionType(str, Enum):
    """Which contributions to show."""
    CREATE_ONLY = "createonly"
    NOT_CREATE = "notcreate"
    ANY = "any"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ContributionType":
        """Case-insensitive; empty and unknown values (including "all") mean ANY."""
        value = (value or "").strip().lower()
        for member in cls:
            if member.value == value:
                return member
        return cls.ANY


@dataclass
class QueryInfo:
    """Everything needed to assemble a SELECT over the wiki schema."""
    tables: Dict[str, str] = field(default_factory=dict)  # alias -> table
    fields: Dict[str, str] = field(default_factory=dict)  # alias -> expression
    conds: List[Condition] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)
    join_conds: Dict[str, Tuple[str, List[str]]] = field(default_factory=dict)
    fname: str = ""


# Revision fields with their comment and actor joins, as the revision store selects them
REVISION_TABLES = {
    "revision": "revision",
    "comment_rev_comment": "comment",
    "actor_rev_user": "actor",
}
REVISION_FIELDS = {
    "rev_id": "rev_id",
    "rev_page": "rev_page",
    "rev_timestamp": "rev_timestamp",
    "rev_minor_edit": "rev_minor_edit",
    "rev_deleted": "rev_deleted",
    "rev_len": "rev_len",
    "rev_parent_id": "rev_parent_id",
    "rev_sha1": "rev_sha1",
    "rev_comment_text": "comment_rev_comment.comment_text",
    "rev_comment_data": "comment_rev_comment.comment_data",
    "rev_comment_cid": "comment_rev_comment.comment_id",
    "rev_user": "actor_rev_user.actor_user",
    "rev_user_text": "actor_rev_user.actor_name",
    "rev_actor": "rev_actor",
}
REVISION_JOINS = {
    "comment_rev_comment": ("JOIN", ["comment_rev_comment.comment_id = rev_comment_id"]),
    "actor_rev_user": ("JOIN", ["actor_rev_user.actor_id = rev_actor"]),
}
PAGE_JOINS = {
    "page": ("INNER JOIN", ["page_id = rev_page"]),
}
USER_JOINS = {
    "user": ("LEFT JOIN", ["actor_rev_user.actor_user != 0", "user_id = actor_rev_user.actor_user"]),
}


class ContributionsQuery:
    """
    The filters of a contribution list and the query they produce.

    Args:
        user: Username of the target
        category: Category name to restrict to, with or without the "Category:" prefix
        type: "createonly" to only show contributions that created the page,
              "notcreate" to only show contributions that modified an existing page;
              any other value shows all contributions
        date_from: Only show contributions on or after this date
        date_to: Only show contributions on or before the end of this date
        viewer: Whose rights decide which deleted revisions stay visible
        namespaces: Namespace names used to normalize the category
    """

    # The index to actually be used for ordering
    index_field = INDEX_FIELD

    def __init__(self, user: str, category: Optional[str] = None, type: Optional[str] = None,
                 date_from: Optional[str] = None, date_to: Optional[str] = None,
                 viewer: Optional[Viewer] = None, namespaces: Optional[NamespaceInfo] = None):
        self.user = (user or "").strip()
        self.viewer = viewer or Viewer.anonymous()
        self.namespaces = namespaces or NamespaceInfo()

        self.category: Optional[Title] = None
        if category:
            try:
                self.category = Title.new_from_text(category, NS_CATEGORY, namespaces=self.namespaces)
            except MalformedTitleError as error:
                log.warning("Ignoring category filter: %s", error)

        self.type = ContributionType.parse(type)

        self.date_from: Optional[str] = start_timestamp(date_from) if date_from else None
        self.date_to: Optional[str] = end_of_day_timestamp(date_to) if date_to else None

    def get_sql_comment(self) -> str:
        return type(self).__name__

    def get_user_cond(self, actor_id: Optional[int]) -> Tuple[List[str], Optional[str], List[Condition], Dict]:
        """
        Generate the condition that will fetch revisions of a specific user.

        Returns:
            Tuple of (tables, index, conds, join_conds)
        """
        tables = ["revision", "page", "user"]
        index = None
        conds: List[Condition] = []
        join_conds: Dict[str, Tuple[str, List[str]]] = {}

        if actor_id:
            conds.append(("rev_actor", "=", actor_id))

        if self.type == ContributionType.CREATE_ONLY:
            conds.append("rev_parent_id = 0")
        elif self.type == ContributionType.NOT_CREATE:
            conds.append("rev_parent_id != 0")

        return tables, index, conds, join_conds

    def get_deletion_cond(self) -> Optional[str]:
        """
        Hide revisions whose user was deleted or suppressed from viewers
        lacking the rights to see them.
        """
        if not self.viewer.is_allowed(RIGHT_DELETEDHISTORY):
            return f"(rev_deleted & {DELETED_USER}) = 0"
        if not self.viewer.is_allowed(RIGHT_SUPPRESSREVISION):
            return f"(rev_deleted & {SUPPRESSED_USER}) != {SUPPRESSED_USER}"
        return None

    def get_query_info(self, actor_id: Optional[int]) -> QueryInfo:
        """Generate the basic query info: tables, fields, conditions and joins."""
        user_tables, index, user_conds, join_conds = self.get_user_cond(actor_id)

        # revision first, then its comment/actor joins and page; the user
        # table must follow actor_rev_user since its join refers to it
        tables = dict(REVISION_TABLES)
        tables["page"] = "page"
        for table in user_tables:
            if table != "user":
                tables.setdefault(table, table)

        conds = list(user_conds)
        if self.category is not None:
            tables["categorylinks"] = "categorylinks"
            conds.append(("cl_to", "=", self.category.get_dbkey()))
            join_conds["categorylinks"] = ("INNER JOIN", ["cl_from = page_id"])
        tables["user"] = "user"

        deletion_cond = self.get_deletion_cond()
        if deletion_cond:
            conds.append(deletion_cond)

        options: Dict[str, Any] = {}
        if index:
            options["USE INDEX"] = {"revision": index}

        fields = dict(REVISION_FIELDS)
        fields["user_name"] = "user_name"
        for page_field in PAGE_FIELDS:
            fields[page_field] = page_field

        all_joins = dict(join_conds)
        all_joins.update(REVISION_JOINS)
        all_joins.update(PAGE_JOINS)
        all_joins.update(USER_JOINS)

        return QueryInfo(
            tables=tables,
            fields=fields,
            conds=conds,
            options=options,
            join_conds=all_joins,
        )

    def build_query_info(self, actor_id: Optional[int]) -> QueryInfo:
        """Generate the full and final query: ordering and date range on top of get_query_info()."""
        info = self.get_query_info(actor_id)
        info.fname = f"{type(self).__name__}.build_query_info ({self.get_sql_comment()})"
        info.options["ORDER BY"] = f"{self.index_field} DESC"

        if self.date_from:
            info.conds.append((self.index_field, ">=", self.date_from))
        if self.date_to:
            info.conds.append((self.index_field, "<=", self.date_to))

        return info


def _quote_identifier(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"


def _table_clause(alias: str, table: str, options: Dict[str, Any]) -> str:
    clause = _quote_identifier(table)
    if alias != table:
        clause += " " + _quote_identifier(alias)
    index = (options.get("USE INDEX") or {}).get(alias)
    if index:
        clause += f" USE INDEX ({_quote_identifier(index)})"
    return clause


def to_sql(info: QueryInfo) -> Tuple[str, List[Any]]:
    """
    Assemble a QueryInfo into a MySQL SELECT with %s placeholders.

    The first table is the FROM table; every other table is joined with its
    join_conds entry, or a plain JOIN when it has none.

    Returns:
        Tuple of (sql, params) ready for cursor.execute()
    """
    if not info.tables:
        raise ValueError("QueryInfo has no tables")
    params: List[Any] = []

    select_list = ", ".join(
        expr if expr == alias else f"{expr} AS {alias}"
        for alias, expr in info.fields.items()
    ) or "*"

    aliases = list(info.tables)
    from_clause = _table_clause(aliases[0], info.tables[aliases[0]], info.options)
    for alias in aliases[1:]:
        clause = _table_clause(alias, info.tables[alias], info.options)
        join_type, on_conds = info.join_conds.get(alias, ("JOIN", []))
        from_clause += f" {join_type} {clause}"
        if on_conds:
            from_clause += " ON (" + " AND ".join(on_conds) + ")"

    where_parts = []
    for cond in info.conds:
        if isinstance(cond, str):
            where_parts.append(cond)
        else:
            column, operator, value = cond
            where_parts.append(f"{column} {operator} %s")
            params.append(value)

    sql = "SELECT "
    if info.fname:
        sql += "/* " + info.fname.replace("*/", "* /") + " */ "
    sql += f"{select_list} FROM {from_clause}"
    if where_parts:
        sql += " WHERE " + " AND ".join(f"({part})" for part in where_parts)
    if info.options.get("ORDER BY"):
        sql += " ORDER BY " + info.options["ORDER BY"]
    return sql, params


__all__ = [
    'Condition',
    'ContributionType',
    'ContributionsQuery',
    'QueryInfo',
    'to_sql',
]
