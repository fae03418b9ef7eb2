"""
Invoice persistence service.

CRITICAL RULES:
1. invoices.amount is ALWAYS integer cents; conversion happens before writes
   (backend.utils.formatting.to_minor_units) and after reads for the form
2. Every write is a single query-builder call (bound parameters, no SQL text)
3. Functions here raise on database failure; the mutation handlers decide how
   failures are reported to the user
"""

import logging
import math
import uuid
from typing import Any, Dict, List, Optional, cast

from supabase import Client

from backend.db.client import run_query
from backend.schemas.invoices import (
    Invoice,
    InvoiceForm,
    InvoiceTableRow,
    LatestInvoice,
)
from backend.utils.constants import ITEMS_PER_PAGE, LATEST_INVOICES_LIMIT
from backend.utils.formatting import cents_to_major

logger = logging.getLogger(__name__)

INVOICES_TABLE = "invoices"


def _is_valid_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def _customer_fields(row: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten the embedded `customers` object PostgREST returns for a join."""
    customer = row.get("customers") or {}
    if isinstance(customer, list):
        customer = customer[0] if customer else {}
    return {
        "name": customer.get("name", ""),
        "email": customer.get("email", ""),
        "image_url": customer.get("image_url"),
    }


async def insert_invoice(
    supabase_client: Client,
    customer_id: str,
    amount_in_cents: int,
    status: str,
    date: str,
) -> Optional[Invoice]:
    """
    Insert a new invoice row.

    Args:
        supabase_client: Supabase client
        customer_id: UUID of the billed customer
        amount_in_cents: Amount in minor units (already converted)
        status: "pending" or "paid" (already validated)
        date: ISO calendar date (YYYY-MM-DD)

    Returns:
        The created Invoice if PostgREST returned the row, otherwise None.

    Raises:
        Exception: If the database operation fails
    """
    invoice_data = {
        "customer_id": customer_id,
        "amount": amount_in_cents,
        "status": status,
        "date": date,
    }

    logger.info(f"Creating invoice for customer {customer_id} (status={status})")

    result = await run_query(
        supabase_client.table(INVOICES_TABLE).insert(invoice_data)
    )

    if not result.data:
        return None

    row = cast(Dict[str, Any], result.data[0])
    created_invoice = Invoice(
        id=str(row["id"]),
        customer_id=str(row["customer_id"]),
        amount=int(row["amount"]),
        status=row["status"],
        date=str(row["date"]),
    )
    logger.info(f"Invoice created successfully: id={created_invoice.id}")

    return created_invoice


async def update_invoice(
    supabase_client: Client,
    invoice_id: str,
    customer_id: str,
    amount_in_cents: int,
    status: str,
    date: str,
) -> int:
    """
    Overwrite every mutable field of an invoice.

    Returns:
        Number of rows updated (0 when the id does not exist or is not a UUID)

    Raises:
        Exception: If the database operation fails
    """
    update_data = {
        "customer_id": customer_id,
        "amount": amount_in_cents,
        "status": status,
        "date": date,
    }

    if not _is_valid_uuid(invoice_id):
        logger.warning(f"Invoice id {invoice_id!r} is not a UUID; nothing to update")
        return 0

    logger.info(f"Updating invoice {invoice_id} (status={status})")

    result = await run_query(
        supabase_client.table(INVOICES_TABLE)
        .update(update_data)
        .eq("id", invoice_id)
    )

    updated = len(result.data or [])
    if updated == 0:
        logger.warning(f"Update of invoice {invoice_id} affected no rows")

    return updated


async def delete_invoice(
    supabase_client: Client,
    invoice_id: str,
) -> int:
    """
    Hard-delete an invoice row.

    Returns:
        Number of rows deleted. 0 is a valid outcome (already absent, or an
        id that is not a UUID and so cannot exist).

    Raises:
        Exception: If the database operation fails
    """
    if not _is_valid_uuid(invoice_id):
        logger.info(f"Invoice id {invoice_id!r} is not a UUID; treating as already absent")
        return 0

    logger.info(f"Deleting invoice {invoice_id}")

    result = await run_query(
        supabase_client.table(INVOICES_TABLE)
        .delete()
        .eq("id", invoice_id)
    )

    deleted = len(result.data or [])
    if deleted == 0:
        logger.info(f"Invoice {invoice_id} was already absent")

    return deleted


async def fetch_invoice_by_id(
    supabase_client: Client,
    invoice_id: str,
) -> Optional[InvoiceForm]:
    """
    Fetch a single invoice for the edit form.

    Ids that are not valid UUIDs can't exist in the table and are reported
    as absent without a round trip.

    Returns:
        InvoiceForm with amount in major units, or None if not found
    """
    if not _is_valid_uuid(invoice_id):
        logger.warning(f"Invoice id {invoice_id!r} is not a UUID; treating as not found")
        return None

    logger.debug(f"Fetching invoice {invoice_id}")

    result = await run_query(
        supabase_client.table(INVOICES_TABLE)
        .select("id, customer_id, amount, status")
        .eq("id", invoice_id)
    )

    if not result.data:
        logger.warning(f"Invoice {invoice_id} not found")
        return None

    row = cast(Dict[str, Any], result.data[0])

    return InvoiceForm(
        id=str(row["id"]),
        customer_id=str(row["customer_id"]),
        amount=cents_to_major(int(row["amount"])),
        status=row["status"],
    )


def _filtered_select(supabase_client: Client, columns: str, query: str, **kwargs: Any) -> Any:
    builder = supabase_client.table(INVOICES_TABLE).select(columns, **kwargs)
    if query:
        builder = builder.ilike("customers.name", f"%{query}%")
    return builder


async def fetch_filtered_invoices(
    supabase_client: Client,
    query: str = "",
    current_page: int = 1,
) -> List[InvoiceTableRow]:
    """
    Fetch one page of invoices joined with their customer, newest first.

    Args:
        supabase_client: Supabase client
        query: Case-insensitive substring of the customer name ("" = all)
        current_page: 1-based page number

    Returns:
        Up to ITEMS_PER_PAGE rows
    """
    offset = (max(current_page, 1) - 1) * ITEMS_PER_PAGE

    logger.debug(f"Fetching invoices (query={query!r}, page={current_page})")

    result = await run_query(
        _filtered_select(
            supabase_client,
            "id, amount, date, status, customers!inner(name, email, image_url)",
            query,
        )
        .order("date", desc=True)
        .range(offset, offset + ITEMS_PER_PAGE - 1)
    )

    rows = cast(List[Dict[str, Any]], result.data or [])

    return [
        InvoiceTableRow(
            id=str(row["id"]),
            amount=int(row["amount"]),
            date=str(row["date"]),
            status=row["status"],
            **_customer_fields(row),
        )
        for row in rows
    ]


async def fetch_invoice_pages(
    supabase_client: Client,
    query: str = "",
) -> int:
    """
    Count how many list pages match `query`.
    """
    result = await run_query(
        _filtered_select(
            supabase_client,
            "id, customers!inner(name)",
            query,
            count="exact",
        ).limit(1)
    )

    total = result.count or 0
    return math.ceil(total / ITEMS_PER_PAGE)


async def fetch_latest_invoices(
    supabase_client: Client,
    limit: int = LATEST_INVOICES_LIMIT,
) -> List[LatestInvoice]:
    """Fetch the most recent invoices for the dashboard card."""
    result = await run_query(
        supabase_client.table(INVOICES_TABLE)
        .select("id, amount, customers(name, email, image_url)")
        .order("date", desc=True)
        .limit(limit)
    )

    rows = cast(List[Dict[str, Any]], result.data or [])

    return [
        LatestInvoice(id=str(row["id"]), amount=int(row["amount"]), **_customer_fields(row))
        for row in rows
    ]


async def count_invoices(supabase_client: Client) -> int:
    result = await run_query(
        supabase_client.table(INVOICES_TABLE).select("id", count="exact").limit(1)
    )
    return result.count or 0


async def fetch_invoice_status_totals(supabase_client: Client) -> Dict[str, int]:
    """
    Sum invoice amounts (cents) per status.

    Returns:
        {"paid": <cents>, "pending": <cents>}
    """
    result = await run_query(
        supabase_client.table(INVOICES_TABLE).select("amount, status")
    )

    totals = {"paid": 0, "pending": 0}
    for row in cast(List[Dict[str, Any]], result.data or []):
        status = row.get("status")
        if status in totals:
            totals[status] += int(row.get("amount") or 0)

    return totals
