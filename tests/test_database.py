"""Tests for database.py replica access."""

from unittest.mock import MagicMock, patch

import pymysql
import pytest

from contribslist.config import Config
from contribslist.database import ReplicaDatabase, connect_replica
from contribslist.errors import ConfigError
from contribslist.query import ContributionsQuery


def _connection(rows=None, one=None):
    """A mock connection whose cursor() works as a context manager."""
    cursor = MagicMock()
    cursor.fetchall.return_value = rows or []
    cursor.fetchone.return_value = one
    connection = MagicMock()
    connection.cursor.return_value.__enter__.return_value = cursor
    return connection, cursor


class TestSelect:
    """Tests for running assembled queries."""

    def test_executes_parameterized_sql(self):
        """Test that select() passes placeholders and parameters separately."""
        connection, cursor = _connection(rows=[{"page_title": b"Caf\xc3\xa9", "page_id": 3}])
        db = ReplicaDatabase(connection)
        info = ContributionsQuery("Example", category="Physics").build_query_info(42)

        rows = list(db.select(info))

        sql, params = cursor.execute.call_args[0]
        assert sql.startswith("SELECT /* ")
        assert params == [42, "Physics"]
        assert rows == [{"page_title": "Café", "page_id": 3}]


class TestFindActorId:
    """Tests for actor lookup."""

    def test_known_user(self):
        """Test that a known user's actor id is returned."""
        connection, cursor = _connection(one={"actor_id": 42})
        db = ReplicaDatabase(connection)
        assert db.find_actor_id("some_user") == 42
        assert cursor.execute.call_args[0][1] == ("Some user",)

    def test_unknown_user(self):
        """Test that an unknown user gives None."""
        connection, _ = _connection(one=None)
        assert ReplicaDatabase(connection).find_actor_id("Nobody") is None

    def test_empty_name_skips_query(self):
        """Test that an empty name does not hit the database."""
        connection, cursor = _connection()
        assert ReplicaDatabase(connection).find_actor_id("  ") is None
        cursor.execute.assert_not_called()


class TestConnectReplica:
    """Tests for opening the connection."""

    @patch("contribslist.database.pymysql.connect")
    def test_defaults_file(self, connect):
        """Test connecting with a MySQL option file."""
        config = Config(db_host="db.example", db_name="testwiki_p", db_defaults_file="/home/u/replica.my.cnf")
        connect_replica(config)
        kwargs = connect.call_args[1]
        assert kwargs["read_default_file"] == "/home/u/replica.my.cnf"
        assert kwargs["host"] == "db.example"
        assert kwargs["database"] == "testwiki_p"
        assert kwargs["cursorclass"] is pymysql.cursors.DictCursor
        assert "user" not in kwargs

    @patch("contribslist.database.pymysql.connect")
    def test_user_and_password(self, connect):
        """Test connecting with an explicit user and password."""
        config = Config(db_host="db.example", db_name="testwiki_p", db_user="u", db_password="p")
        connect_replica(config)
        kwargs = connect.call_args[1]
        assert kwargs["user"] == "u"
        assert kwargs["password"] == "p"

    def test_no_credentials_raises(self):
        """Test that missing credentials raise ConfigError."""
        config = Config(db_host="db.example", db_name="testwiki_p")
        with pytest.raises(ConfigError):
            connect_replica(config)
