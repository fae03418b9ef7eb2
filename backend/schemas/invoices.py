"""
Pydantic schemas for invoice records, forms and dashboard pages.

These models define the typed shapes that flow between the services and the
templates. Amounts are integer cents everywhere except InvoiceForm and
InvoiceFormData, which carry major units for the form UI.
"""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

InvoiceStatus = Literal["pending", "paid"]


# --- Validated form input ---

class InvoiceFormData(BaseModel):
    """
    Typed, normalized result of validating a create/update submission.

    id and date are never part of client input; the server supplies them.
    """
    customer_id: str = Field(..., min_length=1, description="UUID of the billed customer")
    amount: Decimal = Field(..., gt=0, description="Amount in major units (e.g. 49.99)")
    status: InvoiceStatus = Field(..., description="Invoice status")


# --- Stored records ---

class Invoice(BaseModel):
    """
    A row of the invoices table.

    INVARIANT: amount is in minor units (cents) and > 0.
    """
    id: str = Field(..., description="Invoice UUID")
    customer_id: str = Field(..., description="UUID of the billed customer")
    amount: int = Field(..., gt=0, description="Amount in cents")
    status: InvoiceStatus = Field(..., description="Invoice status")
    date: str = Field(..., description="ISO calendar date (YYYY-MM-DD)", examples=["2026-10-19"])


class InvoiceForm(BaseModel):
    """
    Invoice as shown on the edit form.

    amount is converted back to major units so the input shows 49.99, not 4999.
    """
    id: str
    customer_id: str
    amount: Decimal
    status: InvoiceStatus


class CustomerField(BaseModel):
    """A customer option for the invoice form select."""
    id: str
    name: str


class InvoiceTableRow(BaseModel):
    """
    A row of the invoice list, joined with its customer.
    """
    id: str
    amount: int = Field(..., description="Amount in cents")
    date: str
    status: InvoiceStatus
    name: str = Field(..., description="Customer name")
    email: str = Field(..., description="Customer email")
    image_url: Optional[str] = Field(None, description="Customer avatar URL")


class LatestInvoice(BaseModel):
    """A row of the dashboard's latest-invoices card."""
    id: str
    amount: int
    name: str
    email: str
    image_url: Optional[str] = None


class CardData(BaseModel):
    """
    Aggregates shown on the dashboard overview.

    Totals are in cents.
    """
    number_of_invoices: int = 0
    number_of_customers: int = 0
    total_paid_invoices: int = 0
    total_pending_invoices: int = 0


# --- Page models ---

class Breadcrumb(BaseModel):
    label: str
    href: str
    active: bool = False


class InvoiceEditPage(BaseModel):
    """
    Everything the edit template needs.

    Only built when the invoice exists; an absent invoice short-circuits to 404
    before this model is constructed.
    """
    invoice: InvoiceForm
    customers: List[CustomerField]
    breadcrumbs: List[Breadcrumb]


class InvoiceCreatePage(BaseModel):
    customers: List[CustomerField]
    breadcrumbs: List[Breadcrumb]


class InvoiceListPage(BaseModel):
    """
    Invoice list with search and pagination state.
    """
    invoices: List[InvoiceTableRow]
    query: str = ""
    current_page: int = 1
    total_pages: int = 0


class DashboardOverview(BaseModel):
    cards: CardData
    latest_invoices: List[LatestInvoice]
