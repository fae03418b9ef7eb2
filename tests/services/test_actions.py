"""
Tests for the invoice mutation handlers.

Covers the handler state machine:
- validate-fail -> FormState with field errors, no write
- success -> single write with cents + today's date, cache invalidated, Redirect
- database failure -> FormState/ActionError with a generic message, no redirect
- delete of an absent or malformed id -> acknowledgment
"""

from datetime import date
from unittest.mock import patch

import pytest

from backend.schemas.actions import (
    ActionContext,
    ActionError,
    ActionSuccess,
    FormState,
    Redirect,
)
from backend.services import cache
from backend.services.actions import (
    CREATE_VALIDATION_MESSAGE,
    DELETE_SUCCESS_MESSAGE,
    UPDATE_VALIDATION_MESSAGE,
    create_invoice_action,
    delete_invoice_action,
    update_invoice_action,
)
from backend.utils.constants import INVOICES_PATH
from conftest import make_client, make_query

CUSTOMER_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"
INVOICE_ID = "cc27c14a-0acf-4f4a-a6c9-d45682c144b9"
CREATED_ROW = {
    "id": INVOICE_ID,
    "customer_id": CUSTOMER_ID,
    "amount": 4999,
    "status": "pending",
    "date": "2026-10-19",
}


def _context(principal=None, **form):
    fields = {"customerId": CUSTOMER_ID, "amount": "49.99", "status": "pending"}
    fields.update(form)
    return ActionContext(principal=principal, form=fields)


class TestCreateInvoiceAction:
    """Tests for create_invoice_action."""

    @pytest.mark.asyncio
    async def test_valid_submission_inserts_cents_and_redirects(self, principal):
        invoices = make_query(data=[CREATED_ROW])
        client = make_client(invoices=invoices)

        result = await create_invoice_action(client, _context(principal))

        assert result == Redirect(INVOICES_PATH)
        invoices.insert.assert_called_once_with({
            "customer_id": CUSTOMER_ID,
            "amount": 4999,
            "status": "pending",
            "date": date.today().isoformat(),
        })
        assert cache.is_stale(INVOICES_PATH)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "amount, cents",
        [("49.99", 4999), ("1", 100), ("0.01", 1), ("19.995", 2000), ("1234.5", 123450)],
    )
    async def test_amount_is_stored_as_rounded_cents(self, amount, cents):
        invoices = make_query(data=[CREATED_ROW])
        client = make_client(invoices=invoices)

        await create_invoice_action(client, _context(amount=amount))

        inserted = invoices.insert.call_args[0][0]
        assert inserted["amount"] == cents
        assert isinstance(inserted["amount"], int)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["0", "-1", "abc"])
    async def test_invalid_amount_returns_errors_without_writing(self, amount):
        client = make_client()

        result = await create_invoice_action(client, _context(amount=amount))

        assert isinstance(result, FormState)
        assert result.is_validation_error
        assert result.message == CREATE_VALIDATION_MESSAGE
        assert "amount" in result.errors
        client.table.assert_not_called()
        assert not cache.is_stale(INVOICES_PATH)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "amount", ["1e30", "99999999999999999999999999999", "1e1000000", "21474836.48"]
    )
    async def test_oversized_amount_returns_errors_without_writing(self, amount):
        client = make_client()

        result = await create_invoice_action(client, _context(amount=amount))

        assert isinstance(result, FormState)
        assert result.is_validation_error
        assert result.message == CREATE_VALIDATION_MESSAGE
        assert "amount" in result.errors
        client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_status_is_rejected_before_persistence(self):
        client = make_client()

        result = await create_invoice_action(client, _context(status="overdue"))

        assert isinstance(result, FormState)
        assert "status" in result.errors
        client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_error_returns_message_instead_of_raising(self):
        invoices = make_query(error=Exception("connection refused"))
        client = make_client(invoices=invoices)

        result = await create_invoice_action(client, _context())

        assert isinstance(result, FormState)
        assert not result.is_validation_error
        assert result.message == "Database error: failed to create invoice."
        assert result.errors == {}
        assert not cache.is_stale(INVOICES_PATH)

    @pytest.mark.asyncio
    async def test_failing_revalidation_listener_does_not_block_redirect(self):
        def broken_listener(path):
            raise RuntimeError("purge failed")

        cache.register_revalidation_listener(broken_listener)
        client = make_client(invoices=make_query(data=[CREATED_ROW]))

        result = await create_invoice_action(client, _context())

        assert result == Redirect(INVOICES_PATH)


class TestUpdateInvoiceAction:
    """Tests for update_invoice_action."""

    @pytest.mark.asyncio
    async def test_update_overwrites_all_fields_with_validated_status(self, principal):
        invoices = make_query(data=[{"id": INVOICE_ID}])
        client = make_client(invoices=invoices)

        result = await update_invoice_action(
            client, INVOICE_ID, _context(principal, amount="120", status="paid")
        )

        assert result == Redirect(INVOICES_PATH)
        invoices.update.assert_called_once_with({
            "customer_id": CUSTOMER_ID,
            "amount": 12000,
            "status": "paid",
            "date": date.today().isoformat(),
        })
        invoices.eq.assert_called_once_with("id", INVOICE_ID)
        assert cache.is_stale(INVOICES_PATH)

    @pytest.mark.asyncio
    async def test_validation_failure_uses_update_message(self):
        client = make_client()

        result = await update_invoice_action(client, INVOICE_ID, _context(customerId=""))

        assert isinstance(result, FormState)
        assert result.message == UPDATE_VALIDATION_MESSAGE
        assert result.errors == {"customerId": ["Please select a customer."]}
        client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_error_message_carries_invoice_id(self):
        client = make_client(invoices=make_query(error=Exception("constraint violation")))

        result = await update_invoice_action(client, INVOICE_ID, _context())

        assert isinstance(result, FormState)
        assert result.message == f"Database error: failed to update invoice {INVOICE_ID}."


class TestDeleteInvoiceAction:
    """Tests for delete_invoice_action."""

    @pytest.mark.asyncio
    async def test_delete_returns_acknowledgment(self, principal):
        invoices = make_query(data=[{"id": INVOICE_ID}])
        client = make_client(invoices=invoices)

        result = await delete_invoice_action(client, INVOICE_ID, ActionContext(principal, {}))

        assert result == ActionSuccess(DELETE_SUCCESS_MESSAGE)
        invoices.delete.assert_called_once_with()
        invoices.eq.assert_called_once_with("id", INVOICE_ID)
        assert cache.is_stale(INVOICES_PATH)

    @pytest.mark.asyncio
    async def test_delete_of_absent_invoice_is_acknowledged(self):
        client = make_client(invoices=make_query(data=[]))

        result = await delete_invoice_action(client, INVOICE_ID, ActionContext(None, {}))

        assert result == ActionSuccess(DELETE_SUCCESS_MESSAGE)

    @pytest.mark.asyncio
    async def test_delete_of_non_uuid_id_is_acknowledged_without_querying(self):
        client = make_client()

        result = await delete_invoice_action(client, "abc", ActionContext(None, {}))

        assert result == ActionSuccess(DELETE_SUCCESS_MESSAGE)
        client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_error_returns_action_error(self):
        client = make_client(invoices=make_query(error=Exception("timeout")))

        result = await delete_invoice_action(client, INVOICE_ID, ActionContext(None, {}))

        assert result == ActionError(f"Database error: failed to delete invoice {INVOICE_ID}.")
        assert not cache.is_stale(INVOICES_PATH)

    @pytest.mark.asyncio
    async def test_success_revalidates_invoice_list(self):
        client = make_client(invoices=make_query(data=[]))

        with patch("backend.services.actions.revalidate_path") as mock_revalidate:
            await delete_invoice_action(client, INVOICE_ID, ActionContext(None, {}))

        mock_revalidate.assert_called_once_with(INVOICES_PATH)
