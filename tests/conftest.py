"""
Pytest configuration for the Invoice Dashboard tests.

Sets up test environment and global fixtures.
"""
import os
import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SESSION_SECRET", "test-session-secret-with-enough-length-for-hs256")

BUILDER_METHODS = (
    "select", "insert", "update", "delete",
    "eq", "ilike", "order", "range", "limit",
)


def make_query(data=None, count=None, error=None):
    """
    Build a mock PostgREST request builder.

    Every builder method returns the same mock, so any chain ends at
    .execute(), which returns an object with .data and .count (or raises
    `error`).
    """
    query = MagicMock()
    for method in BUILDER_METHODS:
        getattr(query, method).return_value = query

    if error is not None:
        query.execute.side_effect = error
    else:
        query.execute.return_value = MagicMock(data=data if data is not None else [], count=count)

    return query


def make_client(**tables):
    """
    Mock Supabase client whose .table(name) returns the query given for `name`.

    Usage:
        client = make_client(invoices=make_query(data=[...]), customers=make_query(...))
    """
    client = MagicMock()
    client.table.side_effect = lambda name: tables[name]
    return client


@pytest.fixture
def principal():
    from backend.schemas.auth import Principal

    return Principal(
        id="410544b2-4001-4271-9855-fec4b6a6442a",
        name="User",
        email="user@nextmail.com",
    )


@pytest.fixture(autouse=True)
def reset_revalidation_state():
    """Keep the page-cache hook's module state isolated between tests."""
    from backend.services import cache

    cache._stale_paths.clear()
    cache.clear_revalidation_listeners()
    yield
    cache._stale_paths.clear()
    cache.clear_revalidation_listeners()
