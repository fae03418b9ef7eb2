"""
Invoice dashboard pages and form actions.

Flow:
1. GET  /dashboard/invoices                 - list (search + pagination)
2. GET  /dashboard/invoices/create          - create form
3. POST /dashboard/invoices/create          - create handler
4. GET  /dashboard/invoices/{id}/edit       - edit form (404 if absent)
5. POST /dashboard/invoices/{id}/edit       - update handler
6. POST /dashboard/invoices/{id}/delete     - delete handler

Handlers return result variants; this module maps them to HTTP:
- Redirect      -> 303 See Other
- FormState     -> form re-rendered (422 validation / 500 database error)
- ActionSuccess -> list re-rendered with the acknowledgment (200)
- ActionError   -> list re-rendered with the error (500)

The auth gate middleware has already ensured a principal is present.
"""

import logging
from typing import Annotated, Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from backend.auth.dependencies import get_current_principal
from backend.db.client import get_supabase_client
from backend.schemas.actions import (
    ActionContext,
    ActionSuccess,
    FormState,
    Redirect,
)
from backend.schemas.auth import Principal
from backend.schemas.invoices import Breadcrumb, CustomerField, InvoiceForm
from backend.services import (
    assemble_invoice_create_page,
    assemble_invoice_edit_page,
    assemble_invoice_list_page,
    create_invoice_action,
    delete_invoice_action,
    fetch_customers,
    mark_fresh,
    update_invoice_action,
)
from backend.services.pages import invoice_create_breadcrumbs, invoice_edit_breadcrumbs
from backend.utils.constants import INVOICES_PATH
from backend.utils.forms import read_form_fields
from backend.utils.templates import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix=INVOICES_PATH, tags=["invoices"])

CurrentPrincipal = Annotated[Optional[Principal], Depends(get_current_principal)]


def _form_values(invoice: InvoiceForm) -> Dict[str, str]:
    """Pre-fill values for the edit form, keyed by form field name."""
    return {
        "customerId": invoice.customer_id,
        "amount": f"{invoice.amount:.2f}",
        "status": invoice.status,
    }


def _render_form(
    request: Request,
    *,
    action: str,
    title: str,
    submit_label: str,
    customers: List[CustomerField],
    breadcrumbs: List[Breadcrumb],
    values: Dict[str, Any],
    principal: Optional[Principal],
    state: Optional[FormState] = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    return templates.TemplateResponse(
        request,
        "invoices/form.html",
        {
            "principal": principal,
            "action": action,
            "title": title,
            "submit_label": submit_label,
            "customers": customers,
            "breadcrumbs": breadcrumbs,
            "values": values,
            "state": state or FormState(),
        },
        status_code=status_code,
    )


def _form_state_status(state: FormState) -> int:
    if state.is_validation_error:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def _render_list(
    request: Request,
    principal: Optional[Principal],
    query: str = "",
    page: int = 1,
    message: Optional[str] = None,
    error: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    supabase_client = get_supabase_client()

    try:
        list_page = await assemble_invoice_list_page(supabase_client, query, page)
    except Exception as e:
        logger.error(f"Failed to fetch invoices: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve invoices from database"
            }
        )

    mark_fresh(INVOICES_PATH)

    return templates.TemplateResponse(
        request,
        "invoices/list.html",
        {
            "principal": principal,
            "page": list_page,
            "message": message,
            "error": error,
        },
        status_code=status_code,
    )


@router.get(
    "",
    response_class=HTMLResponse,
    summary="Invoice list",
)
async def list_invoices(
    request: Request,
    principal: CurrentPrincipal,
    query: str = "",
    page: Annotated[int, Query(ge=1)] = 1,
) -> Response:
    """
    Render one page of invoices, optionally filtered by customer name.
    """
    logger.info(f"Listing invoices (query={query!r}, page={page})")
    return await _render_list(request, principal, query=query, page=page)


@router.get(
    "/create",
    response_class=HTMLResponse,
    summary="Create invoice form",
)
async def create_invoice_page(request: Request, principal: CurrentPrincipal) -> Response:
    supabase_client = get_supabase_client()

    try:
        page = await assemble_invoice_create_page(supabase_client)
    except Exception as e:
        logger.error(f"Failed to load create invoice page: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve customers from database"
            }
        )

    return _render_form(
        request,
        action=f"{INVOICES_PATH}/create",
        title="Create Invoice",
        submit_label="Create Invoice",
        customers=page.customers,
        breadcrumbs=page.breadcrumbs,
        values={},
        principal=principal,
    )


@router.post(
    "/create",
    summary="Create an invoice",
    description="""
    Validate the submitted form and insert an invoice.

    - Success: 303 redirect to the invoice list
    - Invalid input: form re-rendered with field errors (422), nothing written
    - Database error: form re-rendered with a generic message (500)
    """
)
async def submit_create_invoice(request: Request, principal: CurrentPrincipal) -> Response:
    form = await read_form_fields(request)
    supabase_client = get_supabase_client()

    result = await create_invoice_action(
        supabase_client,
        ActionContext(principal=principal, form=form),
    )

    if isinstance(result, Redirect):
        return RedirectResponse(url=result.path, status_code=status.HTTP_303_SEE_OTHER)

    try:
        customers = await fetch_customers(supabase_client)
    except Exception as e:
        logger.error(f"Failed to reload customers for create form: {e}", exc_info=True)
        customers = []

    return _render_form(
        request,
        action=f"{INVOICES_PATH}/create",
        title="Create Invoice",
        submit_label="Create Invoice",
        customers=customers,
        breadcrumbs=invoice_create_breadcrumbs(),
        values=form,
        principal=principal,
        state=result,
        status_code=_form_state_status(result),
    )


@router.get(
    "/{invoice_id}/edit",
    response_class=HTMLResponse,
    summary="Edit invoice form",
    description="""
    Fetch the invoice and the customer list concurrently and render the form.

    Returns 404 if the invoice does not exist.
    """
)
async def edit_invoice_page(
    invoice_id: str,
    request: Request,
    principal: CurrentPrincipal,
) -> Response:
    supabase_client = get_supabase_client()

    try:
        page = await assemble_invoice_edit_page(supabase_client, invoice_id)
    except Exception as e:
        logger.error(f"Failed to load edit page for invoice {invoice_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve invoice from database"
            }
        )

    if page is None:
        logger.warning(f"Invoice {invoice_id} not found")
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"principal": principal, "resource": "invoice"},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return _render_form(
        request,
        action=f"{INVOICES_PATH}/{invoice_id}/edit",
        title="Edit Invoice",
        submit_label="Edit Invoice",
        customers=page.customers,
        breadcrumbs=page.breadcrumbs,
        values=_form_values(page.invoice),
        principal=principal,
    )


@router.post(
    "/{invoice_id}/edit",
    summary="Update an invoice",
)
async def submit_update_invoice(
    invoice_id: str,
    request: Request,
    principal: CurrentPrincipal,
) -> Response:
    """
    Validate the submitted form and overwrite the invoice.

    Same response mapping as the create handler.
    """
    form = await read_form_fields(request)
    supabase_client = get_supabase_client()

    result = await update_invoice_action(
        supabase_client,
        invoice_id,
        ActionContext(principal=principal, form=form),
    )

    if isinstance(result, Redirect):
        return RedirectResponse(url=result.path, status_code=status.HTTP_303_SEE_OTHER)

    try:
        customers = await fetch_customers(supabase_client)
    except Exception as e:
        logger.error(f"Failed to reload customers for edit form: {e}", exc_info=True)
        customers = []

    return _render_form(
        request,
        action=f"{INVOICES_PATH}/{invoice_id}/edit",
        title="Edit Invoice",
        submit_label="Edit Invoice",
        customers=customers,
        breadcrumbs=invoice_edit_breadcrumbs(invoice_id),
        values=form,
        principal=principal,
        state=result,
        status_code=_form_state_status(result),
    )


@router.post(
    "/{invoice_id}/delete",
    response_class=HTMLResponse,
    summary="Delete an invoice",
    description="""
    Delete the invoice and re-render the list with an acknowledgment.

    Deleting an invoice that no longer exists is acknowledged the same way.
    """
)
async def submit_delete_invoice(
    invoice_id: str,
    request: Request,
    principal: CurrentPrincipal,
) -> Response:
    supabase_client = get_supabase_client()

    result = await delete_invoice_action(
        supabase_client,
        invoice_id,
        ActionContext(principal=principal, form={}),
    )

    if isinstance(result, ActionSuccess):
        return await _render_list(request, principal, message=result.message)

    return await _render_list(
        request,
        principal,
        error=result.message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
