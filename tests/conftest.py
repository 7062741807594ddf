"""Pytest configuration - runs before tests are collected."""

import os

import pytest

# Set required environment variables before bot.py is imported
# These are dummy values just to pass validation - tests don't actually connect
os.environ.setdefault("CONTRIBSLIST_DB_HOST", "localhost")
os.environ.setdefault("CONTRIBSLIST_DB_NAME", "testwiki")


class FakeDatabase:
    """Stands in for ReplicaDatabase: a fixed actor table and fixed result rows."""

    def __init__(self, actors=None, rows=None):
        self.actors = actors or {}
        self.rows = rows or []
        self.queries = []

    def find_actor_id(self, username):
        return self.actors.get(username)

    def select(self, info):
        self.queries.append(info)
        return iter(self.rows)

    def close(self):
        pass


def make_row(page_id, title, namespace=0, redirect=0, latest=None, rev_id=None, parent_id=0):
    """A revision row as the contributions query returns it."""
    return {
        "rev_id": rev_id or page_id * 10,
        "rev_page": page_id,
        "rev_timestamp": "20240301120000",
        "rev_deleted": 0,
        "rev_parent_id": parent_id,
        "rev_user_text": "Example",
        "page_namespace": namespace,
        "page_title": title,
        "page_is_new": 1 if not parent_id else 0,
        "page_id": page_id,
        "page_latest": page_id * 10 if latest is None else latest,
        "page_is_redirect": redirect,
        "page_len": 100,
    }


@pytest.fixture
def fake_db():
    return FakeDatabase(actors={"Example": 42})
