"""
Read-only access to a wiki's replica database.

Provides connect_replica() to open a PyMySQL connection from Config, and
ReplicaDatabase, which runs assembled queries and looks up actor ids.
"""

import logging
from typing import Any, Dict, Iterator, Optional

import pymysql
import pymysql.cursors
from retry import retry

from contribslist.config import Config
from contribslist.errors import ConfigError
from contribslist.query import QueryInfo, to_sql
from contribslist.titles import normalize_user_name


log = logging.getLogger(__name__)


@retry(pymysql.err.OperationalError, tries=3, delay=5, logger=log)
def connect_replica(config: Config) -> pymysql.connections.Connection:
    """
    Open a connection to the replica described by config.

    Credentials come from db_user/db_password, or from a MySQL option file
    (db_defaults_file, e.g. Toolforge's replica.my.cnf).

    Raises:
        ConfigError: If neither credentials nor an option file are configured
        pymysql.err.OperationalError: If the server stays unreachable after retries
    """
    kwargs: Dict[str, Any] = {
        "host": config.db_host,
        "port": config.db_port,
        "database": config.db_name,
        "charset": "utf8mb4",
        "cursorclass": pymysql.cursors.DictCursor,
        "autocommit": True,
    }
    if config.db_defaults_file:
        kwargs["read_default_file"] = config.db_defaults_file
    elif config.db_user:
        kwargs["user"] = config.db_user
        kwargs["password"] = config.db_password or ""
    else:
        raise ConfigError(
            "No database credentials: set CONTRIBSLIST_DB_USER or CONTRIBSLIST_DB_DEFAULTS_FILE"
        )

    log.info("Connecting to %s on %s:%d", config.db_name, config.db_host, config.db_port)
    return pymysql.connect(**kwargs)


def _decode_row(row: Dict[str, Any]) -> Dict[str, Any]:
    # Replica columns are mostly VARBINARY, so text comes back as bytes
    return {
        key: value.decode("utf-8", errors="replace") if isinstance(value, (bytes, bytearray)) else value
        for key, value in row.items()
    }


class ReplicaDatabase:
    """
    Thin wrapper over a DB-API connection whose cursors return dict rows.

    Args:
        connection: An open PyMySQL connection (DictCursor)
    """

    def __init__(self, connection):
        self.connection = connection

    def select(self, info: QueryInfo) -> Iterator[Dict[str, Any]]:
        """Run the query described by info and yield decoded rows."""
        sql, params = to_sql(info)
        log.debug("Query: %s; params=%r", sql, params)
        with self.connection.cursor() as cursor:
            cursor.execute(sql, params)
            for row in cursor.fetchall():
                yield _decode_row(row)

    def find_actor_id(self, username: str) -> Optional[int]:
        """
        Look up the actor id of a user name.

        Returns:
            The actor id, or None if the name has never edited (or is empty)
        """
        name = normalize_user_name(username)
        if not name:
            return None
        with self.connection.cursor() as cursor:
            cursor.execute(
                "SELECT /* ReplicaDatabase.find_actor_id */ actor_id FROM actor WHERE actor_name = %s LIMIT 1",
                (name,),
            )
            row = cursor.fetchone()
        if not row:
            log.info("No actor found for user %r", name)
            return None
        return int(row["actor_id"])

    def close(self) -> None:
        self.connection.close()


__all__ = [
    'ReplicaDatabase',
    'connect_replica',
]
