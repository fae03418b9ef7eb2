"""
Service layer for the Invoice Dashboard backend.

Contains the logic between routes (HTTP layer) and the database:
- Explicit validation of form input
- Invoice mutation handlers returning result variants
- Page assembly (concurrent reads joined before rendering)
- Invoice, customer and user persistence
- Page-cache invalidation hook
"""

from .actions import (
    create_invoice_action,
    delete_invoice_action,
    update_invoice_action,
)
from .cache import is_stale, mark_fresh, register_revalidation_listener, revalidate_path
from .customer_service import count_customers, fetch_customers
from .invoice_service import (
    count_invoices,
    delete_invoice,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoice_pages,
    fetch_invoice_status_totals,
    fetch_latest_invoices,
    insert_invoice,
    update_invoice,
)
from .pages import (
    assemble_dashboard_overview,
    assemble_invoice_create_page,
    assemble_invoice_edit_page,
    assemble_invoice_list_page,
)
from .user_service import UserLookupError, create_user, get_user_by_email, hash_password
from .validation import validate_credentials, validate_invoice_form

__all__ = [
    "create_invoice_action",
    "update_invoice_action",
    "delete_invoice_action",
    "revalidate_path",
    "register_revalidation_listener",
    "is_stale",
    "mark_fresh",
    "fetch_customers",
    "count_customers",
    "insert_invoice",
    "update_invoice",
    "delete_invoice",
    "fetch_invoice_by_id",
    "fetch_filtered_invoices",
    "fetch_invoice_pages",
    "fetch_latest_invoices",
    "count_invoices",
    "fetch_invoice_status_totals",
    "assemble_invoice_edit_page",
    "assemble_invoice_create_page",
    "assemble_invoice_list_page",
    "assemble_dashboard_overview",
    "get_user_by_email",
    "create_user",
    "hash_password",
    "UserLookupError",
    "validate_invoice_form",
    "validate_credentials",
]
