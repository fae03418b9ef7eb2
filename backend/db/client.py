"""
Supabase client factory and query runner.

The dashboard talks to its own Postgres tables (invoices, customers, users)
through PostgREST. Every write goes through the query builder, so values are
always sent as bound parameters, never spliced into SQL text.

RULES:
1. Create the client through get_supabase_client() so tests can patch it
2. Execute queries through run_query() so blocking HTTP I/O stays off the event loop
3. NEVER log the secret key
"""

import asyncio
import logging
from functools import lru_cache
from typing import Any

from backend.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Return the process-wide Supabase client for the dashboard.

    The client is created lazily on first use and reused afterwards; the
    underlying HTTP session is owned by supabase-py.

    Returns:
        A Supabase client authenticated with the server-side secret key.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_SECRET_KEY is not configured.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_SECRET_KEY:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_SECRET_KEY must be configured "
            "before the database can be used."
        )

    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_SECRET_KEY
    )

    logger.debug("Created Supabase client for the dashboard")

    return client


async def run_query(query: Any) -> Any:
    """
    Execute a prepared PostgREST query in a worker thread.

    supabase-py's sync builder blocks on HTTP; running execute() in a thread
    lets independent reads (e.g. invoice + customers) overlap.

    Args:
        query: A fully built request builder (anything with .execute()).

    Returns:
        The APIResponse from supabase-py (has .data and .count).
    """
    return await asyncio.to_thread(query.execute)
