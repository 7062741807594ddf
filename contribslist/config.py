"""
Configuration management for contribslist.

Provides Config dataclass for managing all configuration from environment
variables.
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Optional


DEFAULT_USER_AGENT = "ContributionsList/1.0 (https://www.mediawiki.org/wiki/Extension:ContributionsList)"


@dataclass
class Config:
    """
    Configuration loaded from environment variables.

    All settings are loaded via from_environment() classmethod.
    Required fields (db_host, db_name) must be set.
    Optional fields have sensible defaults.

    Attributes:
        db_host: Replica database host (CONTRIBSLIST_DB_HOST)
        db_name: Wiki database name, e.g. "enwiki_p" (CONTRIBSLIST_DB_NAME)
        db_port: Replica database port (default: 3306)
        db_user: Database user, unless read from db_defaults_file
        db_password: Database password, unless read from db_defaults_file
        db_defaults_file: MySQL option file such as Toolforge's replica.my.cnf
        api_host: Wiki API host (default: "en.wikipedia.org")
        api_path: Wiki API path (default: "/w/")
        user_agent: HTTP User-Agent string
        username: BotPassword username used to learn the viewer's rights (optional)
        password: BotPassword password (optional)
        server: Server URL used in links (default: "https://" + api_host)
        article_path: Article path with a $1 placeholder (default: "/wiki/$1")
        log_level: Logging level (default: "INFO")
    """
    # Required fields
    db_host: str
    db_name: str

    # Optional fields with defaults
    db_port: int = 3306
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_defaults_file: Optional[str] = None
    api_host: str = "en.wikipedia.org"
    api_path: str = "/w/"
    user_agent: str = DEFAULT_USER_AGENT
    username: Optional[str] = None
    password: Optional[str] = None
    server: str = field(default="")  # Computed from api_host if not set
    article_path: str = "/wiki/$1"
    log_level: str = "INFO"

    def __post_init__(self):
        """Set computed defaults after initialization."""
        if not self.server:
            self.server = f"https://{self.api_host}"

    @property
    def has_login(self) -> bool:
        return bool(self.username and self.password)

    @property
    def script_path(self) -> str:
        return self.api_path.rstrip("/")

    @classmethod
    def from_environment(cls) -> "Config":
        """
        Load configuration from environment variables.

        Environment variables:
            CONTRIBSLIST_DB_HOST (required)
            CONTRIBSLIST_DB_NAME (required)
            CONTRIBSLIST_DB_PORT (optional, default: 3306)
            CONTRIBSLIST_DB_USER (optional)
            CONTRIBSLIST_DB_PASSWORD (optional)
            CONTRIBSLIST_DB_DEFAULTS_FILE (optional)
            CONTRIBSLIST_API_HOST (optional, default: "en.wikipedia.org")
            CONTRIBSLIST_API_PATH (optional, default: "/w/")
            CONTRIBSLIST_USER_AGENT (optional)
            CONTRIBSLIST_USERNAME (optional)
            CONTRIBSLIST_PASSWORD (optional)
            CONTRIBSLIST_SERVER (optional)
            CONTRIBSLIST_ARTICLE_PATH (optional, default: "/wiki/$1")
            CONTRIBSLIST_LOG_LEVEL (optional, default: "INFO")

        Returns:
            Config instance

        Raises:
            SystemExit: If required environment variables are missing or invalid
        """
        db_host = os.environ.get("CONTRIBSLIST_DB_HOST")
        db_name = os.environ.get("CONTRIBSLIST_DB_NAME")

        # Validate required fields before creating config
        if not db_host or not db_name:
            # Print to stderr since logging may not be configured yet
            print(
                "ERROR: Missing required environment variables. "
                "Set CONTRIBSLIST_DB_HOST and CONTRIBSLIST_DB_NAME.",
                file=sys.stderr
            )
            sys.exit(2)

        port_raw = (os.environ.get("CONTRIBSLIST_DB_PORT") or "3306").strip()
        try:
            db_port = int(port_raw)
        except ValueError:
            print(f"ERROR: CONTRIBSLIST_DB_PORT is not a number: {port_raw!r}", file=sys.stderr)
            sys.exit(2)

        defaults_file = os.environ.get("CONTRIBSLIST_DB_DEFAULTS_FILE")
        if defaults_file:
            defaults_file = os.path.expanduser(defaults_file)

        api_host = os.environ.get("CONTRIBSLIST_API_HOST", "en.wikipedia.org")
        log_level = os.environ.get("CONTRIBSLIST_LOG_LEVEL", "INFO").upper()

        return cls(
            db_host=db_host,
            db_name=db_name,
            db_port=db_port,
            db_user=os.environ.get("CONTRIBSLIST_DB_USER") or None,
            db_password=os.environ.get("CONTRIBSLIST_DB_PASSWORD") or None,
            db_defaults_file=defaults_file or None,
            api_host=api_host,
            api_path=os.environ.get("CONTRIBSLIST_API_PATH", "/w/"),
            user_agent=os.environ.get("CONTRIBSLIST_USER_AGENT", DEFAULT_USER_AGENT),
            username=os.environ.get("CONTRIBSLIST_USERNAME") or None,
            password=os.environ.get("CONTRIBSLIST_PASSWORD") or None,
            server=os.environ.get("CONTRIBSLIST_SERVER", f"https://{api_host}"),
            article_path=os.environ.get("CONTRIBSLIST_ARTICLE_PATH", "/wiki/$1"),
            log_level=log_level,
        )


__all__ = ['Config', 'DEFAULT_USER_AGENT']
