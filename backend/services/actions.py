"""
Invoice mutation handlers (create, update, delete).

Each handler runs:

    validate -> transform -> persist -> invalidate cache -> redirect

or stops at the first step with the validation errors. Handlers take the
request context explicitly (ActionContext) and return a result variant; they
never raise for bad input or database failures.

Persistence failures are caught here, logged with traceback, and turned into a
generic message. Redirect is returned, never raised, so it is outside the
reach of the `except` around the write.
"""

import logging
from datetime import date
from typing import Optional

from supabase import Client

from backend.schemas.actions import (
    ActionContext,
    ActionError,
    ActionSuccess,
    DeleteResult,
    FormState,
    MutationResult,
    Redirect,
)
from backend.services.cache import revalidate_path
from backend.services.invoice_service import delete_invoice, insert_invoice, update_invoice
from backend.services.validation import ValidationFailure, validate_invoice_form
from backend.utils.constants import INVOICES_PATH
from backend.utils.formatting import to_minor_units

logger = logging.getLogger(__name__)

CREATE_VALIDATION_MESSAGE = "Missing fields. Failed to create invoice."
UPDATE_VALIDATION_MESSAGE = "Missing fields. Failed to update invoice."
DELETE_SUCCESS_MESSAGE = "Invoice deleted."


def _actor(context: ActionContext) -> Optional[str]:
    return context.principal.id if context.principal else None


def _today() -> str:
    return date.today().isoformat()


async def create_invoice_action(
    supabase_client: Client,
    context: ActionContext,
) -> MutationResult:
    """
    Validate and persist a new invoice.

    Args:
        supabase_client: Supabase client
        context: Principal and submitted form fields (customerId, amount, status)

    Returns:
        Redirect to the invoice list on success; FormState with field errors
        or a database error message otherwise.
    """
    validated = validate_invoice_form(context.form)

    if isinstance(validated, ValidationFailure):
        return FormState(
            message=CREATE_VALIDATION_MESSAGE,
            errors=validated.errors,
            is_validation_error=True,
        )

    data = validated.data
    amount_in_cents = to_minor_units(data.amount)
    invoice_date = _today()

    try:
        created = await insert_invoice(
            supabase_client=supabase_client,
            customer_id=data.customer_id,
            amount_in_cents=amount_in_cents,
            status=data.status,
            date=invoice_date,
        )
    except Exception as e:
        logger.error(f"Failed to create invoice (user={_actor(context)}): {e}", exc_info=True)
        return FormState(message="Database error: failed to create invoice.")

    revalidate_path(INVOICES_PATH)
    created_id = created.id if created else "(not returned)"
    logger.info(f"Invoice {created_id} created by user={_actor(context)}")

    return Redirect(INVOICES_PATH)


async def update_invoice_action(
    supabase_client: Client,
    invoice_id: str,
    context: ActionContext,
) -> MutationResult:
    """
    Validate and overwrite an existing invoice.

    Every field is overwritten, including date (reset to today). The validated
    status is the one written.

    Returns:
        Redirect to the invoice list on success; FormState otherwise.
    """
    validated = validate_invoice_form(context.form)

    if isinstance(validated, ValidationFailure):
        return FormState(
            message=UPDATE_VALIDATION_MESSAGE,
            errors=validated.errors,
            is_validation_error=True,
        )

    data = validated.data
    amount_in_cents = to_minor_units(data.amount)
    updated_date = _today()

    try:
        await update_invoice(
            supabase_client=supabase_client,
            invoice_id=invoice_id,
            customer_id=data.customer_id,
            amount_in_cents=amount_in_cents,
            status=data.status,
            date=updated_date,
        )
    except Exception as e:
        logger.error(
            f"Failed to update invoice {invoice_id} (user={_actor(context)}): {e}",
            exc_info=True,
        )
        return FormState(message=f"Database error: failed to update invoice {invoice_id}.")

    revalidate_path(INVOICES_PATH)
    logger.info(f"Invoice {invoice_id} updated by user={_actor(context)}")

    return Redirect(INVOICES_PATH)


async def delete_invoice_action(
    supabase_client: Client,
    invoice_id: str,
    context: ActionContext,
) -> DeleteResult:
    """
    Delete an invoice and acknowledge.

    Deleting an id that no longer exists is acknowledged like any other
    delete; only a database failure produces ActionError.
    """
    try:
        await delete_invoice(supabase_client=supabase_client, invoice_id=invoice_id)
    except Exception as e:
        logger.error(
            f"Failed to delete invoice {invoice_id} (user={_actor(context)}): {e}",
            exc_info=True,
        )
        return ActionError(message=f"Database error: failed to delete invoice {invoice_id}.")

    revalidate_path(INVOICES_PATH)
    logger.info(f"Invoice {invoice_id} deleted by user={_actor(context)}")

    return ActionSuccess(message=DELETE_SUCCESS_MESSAGE)
