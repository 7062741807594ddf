"""Tests for bot.py command-line entry point."""

from unittest.mock import MagicMock, patch

import mwclient
import pymysql

from conftest import FakeDatabase, make_row

import bot
from contribslist.config import Config
from contribslist.errors import ConfigError
from contribslist.permissions import Viewer


class TestParseArgs:
    """Tests for command-line parsing."""

    def test_params_and_output(self):
        """Test that name=value arguments and --output are collected."""
        args = bot.parse_args(["user=Example", "format=ol", "-o", "out.html"])
        assert args.params == ["user=Example", "format=ol"]
        assert args.output == "out.html"
        assert not args.no_api

    def test_no_api(self):
        """Test that --no-api is recognized."""
        assert bot.parse_args(["--no-api"]).no_api


class TestLoadSiteContext:
    """Tests for learning the viewer and link settings."""

    def test_without_api(self):
        """Test that without the API the viewer is anonymous and config defaults are used."""
        config = Config(db_host="db", db_name="testwiki", api_host="test.wikipedia.org")
        viewer, renderer, namespaces = bot.load_site_context(config, use_api=False)
        assert viewer == Viewer.anonymous()
        assert renderer.server == "https://test.wikipedia.org"
        assert renderer.script_path == "/w"
        assert namespaces.get_name(14) == "Category"

    @patch("bot.connect_site")
    def test_with_api(self, connect_site):
        """Test that rights, link settings and namespaces come from the site."""
        site = MagicMock()
        site.api.return_value = {"query": {"userinfo": {"name": "Admin", "rights": ["deletedhistory"]}}}
        site.site = {"server": "//test.wikipedia.org", "articlepath": "/wiki/$1", "scriptpath": "/w"}
        site.namespaces = {0: "", 14: "Category"}
        connect_site.return_value = site

        config = Config(db_host="db", db_name="testwiki")
        viewer, renderer, namespaces = bot.load_site_context(config)
        assert viewer.is_allowed("deletedhistory")
        assert renderer.server == "https://en.wikipedia.org"
        assert namespaces.get_id("Category") == 14

    @patch("bot.mwclient.Site")
    def test_connect_site_logs_in_when_configured(self, site_class):
        """Test that a configured BotPassword is used to log in."""
        config = Config(db_host="db", db_name="testwiki", username="Tool@List", password="secret")
        bot.connect_site(config)
        site_class.return_value.login.assert_called_once_with("Tool@List", "secret")

    @patch("bot.mwclient.Site")
    def test_connect_site_anonymous(self, site_class):
        """Test that no login happens without credentials."""
        bot.connect_site(Config(db_host="db", db_name="testwiki"))
        site_class.return_value.login.assert_not_called()


class TestMain:
    """Tests for the main entry point."""

    @patch("bot.ReplicaDatabase")
    @patch("bot.connect_replica")
    def test_prints_html(self, connect_replica, replica_database, capsys):
        """Test that the rendered list is printed to stdout."""
        replica_database.return_value = FakeDatabase(actors={"Example": 42}, rows=[make_row(1, "Alpha")])
        assert bot.main(["--no-api", "user=Example", "format=ol"]) == 0
        out = capsys.readouterr().out
        assert out.startswith('<ol class="contributionslist"><li><a href="https://en.wikipedia.org/wiki/Alpha"')

    @patch("bot.ReplicaDatabase")
    @patch("bot.connect_replica")
    def test_writes_output_file(self, connect_replica, replica_database, tmp_path):
        """Test that --output writes the list to a file."""
        replica_database.return_value = FakeDatabase(actors={"Example": 42}, rows=[make_row(1, "Alpha")])
        target = tmp_path / "list.html"
        assert bot.main(["--no-api", "user=Example", "format=plain", "--output", str(target)]) == 0
        assert ">Alpha</a>" in target.read_text(encoding="utf-8")

    @patch("bot.connect_replica", side_effect=ConfigError("No database credentials"))
    def test_missing_credentials_exit_code(self, connect_replica):
        """Test that missing database credentials exit with status 2."""
        assert bot.main(["--no-api", "user=Example"]) == 2


class TestRun:
    """Tests for the console script wrapper around main()."""

    @patch("bot.main", return_value=0)
    def test_passes_exit_code_through(self, main):
        """Test that main()'s return value is the exit code."""
        assert bot.run(["user=Example"]) == 0
        main.assert_called_once_with(["user=Example"])

    @patch("bot.main", side_effect=pymysql.err.OperationalError(2003, "Can't connect to MySQL server"))
    def test_database_error_exit_code(self, main):
        """Test that a database error exits with status 1."""
        assert bot.run([]) == 1

    @patch("bot.main", side_effect=mwclient.errors.APIError("readapidenied", "You need read permission", {}))
    def test_api_error_exit_code(self, main):
        """Test that a MediaWiki API error exits with status 1."""
        assert bot.run([]) == 1

    @patch("bot.main", side_effect=RuntimeError("boom"))
    def test_unexpected_error_exit_code(self, main):
        """Test that any other exception is logged and exits with status 1."""
        assert bot.run([]) == 1
