"""
Page assembly for the server-rendered dashboard.

Each function gathers the reads a page needs and returns a typed page model
for the template. Independent reads run concurrently and are joined before
anything is rendered; if one fails, the whole page fails (no partial render).
Every fan-out is bounded by settings.FETCH_TIMEOUT_SECONDS.
"""

import asyncio
import logging
from typing import Awaitable, List, Optional, TypeVar

from supabase import Client

from backend.config import settings
from backend.schemas.invoices import (
    Breadcrumb,
    CardData,
    DashboardOverview,
    InvoiceCreatePage,
    InvoiceEditPage,
    InvoiceListPage,
)
from backend.services.customer_service import count_customers, fetch_customers
from backend.services.invoice_service import (
    count_invoices,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoice_pages,
    fetch_invoice_status_totals,
    fetch_latest_invoices,
)
from backend.utils.constants import INVOICES_PATH

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _bounded(awaitable: Awaitable[T]) -> T:
    return await asyncio.wait_for(awaitable, timeout=settings.FETCH_TIMEOUT_SECONDS)


def invoice_edit_breadcrumbs(invoice_id: str) -> List[Breadcrumb]:
    return [
        Breadcrumb(label="Invoices", href=INVOICES_PATH),
        Breadcrumb(
            label=f"Edit Invoice - {invoice_id}",
            href=f"{INVOICES_PATH}/{invoice_id}/edit",
            active=True,
        ),
    ]


def invoice_create_breadcrumbs() -> List[Breadcrumb]:
    return [
        Breadcrumb(label="Invoices", href=INVOICES_PATH),
        Breadcrumb(label="Create Invoice", href=f"{INVOICES_PATH}/create", active=True),
    ]


async def assemble_invoice_edit_page(
    supabase_client: Client,
    invoice_id: str,
) -> Optional[InvoiceEditPage]:
    """
    Build the edit page for one invoice.

    The invoice and the customer list are fetched concurrently. If the
    invoice does not exist, returns None before any form model is built.

    Args:
        supabase_client: Supabase client
        invoice_id: Path parameter from /dashboard/invoices/{id}/edit

    Returns:
        InvoiceEditPage, or None when the invoice is absent

    Raises:
        asyncio.TimeoutError: If the reads exceed FETCH_TIMEOUT_SECONDS
        Exception: If either read fails
    """
    invoice, customers = await _bounded(
        asyncio.gather(
            fetch_invoice_by_id(supabase_client, invoice_id),
            fetch_customers(supabase_client),
        )
    )

    if invoice is None:
        logger.info(f"Edit page requested for missing invoice {invoice_id}")
        return None

    return InvoiceEditPage(
        invoice=invoice,
        customers=customers,
        breadcrumbs=invoice_edit_breadcrumbs(invoice_id),
    )


async def assemble_invoice_create_page(supabase_client: Client) -> InvoiceCreatePage:
    customers = await _bounded(fetch_customers(supabase_client))

    return InvoiceCreatePage(
        customers=customers,
        breadcrumbs=invoice_create_breadcrumbs(),
    )


async def assemble_invoice_list_page(
    supabase_client: Client,
    query: str = "",
    current_page: int = 1,
) -> InvoiceListPage:
    """Fetch one page of invoices and the page count concurrently."""
    invoices, total_pages = await _bounded(
        asyncio.gather(
            fetch_filtered_invoices(supabase_client, query, current_page),
            fetch_invoice_pages(supabase_client, query),
        )
    )

    return InvoiceListPage(
        invoices=invoices,
        query=query,
        current_page=current_page,
        total_pages=total_pages,
    )


async def assemble_dashboard_overview(supabase_client: Client) -> DashboardOverview:
    """
    Build the overview cards and the latest-invoices card.

    Four independent reads, joined before rendering.
    """
    number_of_invoices, number_of_customers, totals, latest = await _bounded(
        asyncio.gather(
            count_invoices(supabase_client),
            count_customers(supabase_client),
            fetch_invoice_status_totals(supabase_client),
            fetch_latest_invoices(supabase_client),
        )
    )

    return DashboardOverview(
        cards=CardData(
            number_of_invoices=number_of_invoices,
            number_of_customers=number_of_customers,
            total_paid_invoices=totals["paid"],
            total_pending_invoices=totals["pending"],
        ),
        latest_invoices=latest,
    )
