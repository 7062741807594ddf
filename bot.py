#!/usr/bin/env python3
"""
ContributionsList - render a wiki user's contributions as HTML

This script evaluates the #contributionslist parser function outside the wiki:
it reads a user's revisions from the wiki's replica database and prints the
pages they contributed to as an HTML list.

System Architecture:
- Reads revisions, pages, actors and category links from the replica via PyMySQL
- Learns the viewer's rights, namespace names and article path from the
  MediaWiki API using the mwclient library
- Hides revisions with a deleted or suppressed user unless the viewer may see them
- Renders an ordered list, an unordered list or plain comma-separated text

Usage:

  ./bot.py user=Example category=Physics type=createonly format=ol \\
           datefrom=2024-01-01 dateto=2024-01-31 [--output FILE]

Arguments use the parser function's "name=value" form. Unknown formats
fall back to an unordered list.

Environment variables (all ASCII):

  CONTRIBSLIST_DB_HOST            Required. Replica host, e.g. "enwiki.analytics.db.svc.wikimedia.cloud"
  CONTRIBSLIST_DB_NAME            Required. Database name, e.g. "enwiki_p"
  CONTRIBSLIST_DB_PORT            Optional. Default 3306
  CONTRIBSLIST_DB_USER            Optional. Database user
  CONTRIBSLIST_DB_PASSWORD        Optional. Database password
  CONTRIBSLIST_DB_DEFAULTS_FILE   Optional. MySQL option file, e.g. "~/replica.my.cnf"
  CONTRIBSLIST_API_HOST           Optional. Host for wiki (default: "en.wikipedia.org")
  CONTRIBSLIST_API_PATH           Optional. Path (default: "/w/")
  CONTRIBSLIST_USER_AGENT         Optional. Shown in requests
  CONTRIBSLIST_USERNAME           Optional. BotPassword username; the list is rendered with its rights
  CONTRIBSLIST_PASSWORD           Optional. BotPassword password
  CONTRIBSLIST_SERVER             Optional. Server used in links (default: "https://" + API host)
  CONTRIBSLIST_ARTICLE_PATH       Optional. Default "/wiki/$1"
  CONTRIBSLIST_LOG_LEVEL          Optional. Default "INFO"
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

import mwclient
import pymysql

from contribslist.config import Config
from contribslist.database import ReplicaDatabase, connect_replica
from contribslist.errors import ConfigError
from contribslist.markup import LinkRenderer
from contribslist.parser_function import contributionslist_parser_function
from contribslist.permissions import Viewer, fetch_viewer
from contribslist.titles import NamespaceInfo


log = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render a wiki user's contributions as HTML.",
    )
    parser.add_argument(
        "params",
        nargs="*",
        metavar="name=value",
        help="parser function arguments: user, category, type, format, datefrom, dateto",
    )
    parser.add_argument("-o", "--output", help="write the HTML to this file instead of stdout")
    parser.add_argument(
        "--no-api",
        action="store_true",
        help="do not contact the wiki API; render as an anonymous viewer with default namespaces",
    )
    return parser.parse_args(argv)


def connect_site(config: Config) -> mwclient.Site:
    site = mwclient.Site(
        config.api_host,
        scheme="https",
        path=config.api_path,
        clients_useragent=config.user_agent,
    )
    if config.has_login:
        site.login(config.username, config.password)
    return site


def load_site_context(config: Config, use_api: bool = True) -> Tuple[Viewer, LinkRenderer, NamespaceInfo]:
    """
    Work out who is viewing and how to link to pages.

    With the API, the viewer's rights, the namespace names and the article path
    come from the wiki. Without it, the viewer is anonymous and the defaults
    from config are used.
    """
    if not use_api:
        return (
            Viewer.anonymous(),
            LinkRenderer(config.server, config.article_path, config.script_path),
            NamespaceInfo(),
        )

    site = connect_site(config)
    viewer = fetch_viewer(site)
    link_renderer = LinkRenderer.from_site(site, server=config.server)
    namespaces = NamespaceInfo.from_site(site)
    return viewer, link_renderer, namespaces


def write_output(html: str, output: Optional[str]) -> None:
    if output:
        with open(output, "w", encoding="utf-8") as handle:
            handle.write(html + "\n")
        log.info("Wrote %d characters to %s", len(html), output)
    else:
        print(html)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        0 on success, 2 on configuration/setup error, 1 on database or API error
    """
    args = parse_args(argv)
    config = Config.from_environment()
    setup_logging(config.log_level)

    viewer, link_renderer, namespaces = load_site_context(config, use_api=not args.no_api)

    try:
        connection = connect_replica(config)
    except ConfigError as error:
        log.error("%s", error)
        return 2

    db = ReplicaDatabase(connection)
    try:
        result = contributionslist_parser_function(
            args.params,
            db=db,
            viewer=viewer,
            link_renderer=link_renderer,
            namespaces=namespaces,
        )
    finally:
        db.close()

    write_output(result.text, args.output)
    return 0


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run main() and turn database and API failures into exit status 1.

    This is the console script entry point.
    """
    try:
        return main(argv)
    except mwclient.errors.APIError as api_error:
        log.error("MediaWiki API error: %s", api_error)
        return 1
    except pymysql.err.Error as db_error:
        log.error("Database error: %s", db_error)
        return 1
    except Exception as error:
        log.exception("Unhandled exception: %s", error)
        return 1


if __name__ == "__main__":
    sys.exit(run())
