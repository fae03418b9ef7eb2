"""
Database access layer for the Invoice Dashboard backend.

All database operations MUST:
- Go through the Supabase query builder (parameterized, never raw SQL strings)
- Execute via run_query() so reads can run concurrently
- Never invent tables beyond invoices, customers and users

DO NOT define table schemas or migrations here.
"""

from .client import get_supabase_client, run_query

__all__ = ["get_supabase_client", "run_query"]
