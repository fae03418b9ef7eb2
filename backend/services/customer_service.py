"""
Customer read service.

Customers are owned by another part of the business; the dashboard only reads
them to populate the invoice form and the overview counts.
"""

import logging
from typing import Any, Dict, List, cast

from supabase import Client

from backend.db.client import run_query
from backend.schemas.invoices import CustomerField

logger = logging.getLogger(__name__)

CUSTOMERS_TABLE = "customers"


async def fetch_customers(supabase_client: Client) -> List[CustomerField]:
    """
    Fetch every customer as a form option, ordered by name.

    Raises:
        Exception: If the database operation fails
    """
    result = await run_query(
        supabase_client.table(CUSTOMERS_TABLE)
        .select("id, name")
        .order("name")
    )

    rows = cast(List[Dict[str, Any]], result.data or [])

    logger.debug(f"Fetched {len(rows)} customers")

    return [CustomerField(id=str(row["id"]), name=row["name"]) for row in rows]


async def count_customers(supabase_client: Client) -> int:
    result = await run_query(
        supabase_client.table(CUSTOMERS_TABLE).select("id", count="exact").limit(1)
    )
    return result.count or 0
