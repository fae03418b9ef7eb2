"""
Tests for invoice form and credential validation.

Covers:
- Valid submissions produce a typed record
- Per-field messages for customerId, amount and status
- Non-numeric amounts get an amount-specific message
- Amounts above the integer cents column are rejected, not overflowed
- Credential shape checks (email syntax, password length)
"""

from decimal import Decimal

import pytest

from backend.services.validation import (
    AMOUNT_INVALID_MESSAGE,
    AMOUNT_NOT_POSITIVE_MESSAGE,
    AMOUNT_TOO_LARGE_MESSAGE,
    CUSTOMER_REQUIRED_MESSAGE,
    STATUS_REQUIRED_MESSAGE,
    ValidationFailure,
    ValidationSuccess,
    validate_credentials,
    validate_invoice_form,
)

CUSTOMER_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"


def _form(**overrides):
    form = {"customerId": CUSTOMER_ID, "amount": "49.99", "status": "pending"}
    form.update(overrides)
    return form


class TestValidateInvoiceForm:
    """Tests for validate_invoice_form."""

    def test_valid_submission_returns_typed_record(self):
        result = validate_invoice_form(_form())

        assert isinstance(result, ValidationSuccess)
        assert result.data.customer_id == CUSTOMER_ID
        assert result.data.amount == Decimal("49.99")
        assert result.data.status == "pending"

    def test_paid_status_is_accepted(self):
        result = validate_invoice_form(_form(status="paid"))

        assert isinstance(result, ValidationSuccess)
        assert result.data.status == "paid"

    @pytest.mark.parametrize("amount", ["0", "-5", "0.00", "", None, "0.001", "-1e1000000"])
    def test_non_positive_amount_is_rejected(self, amount):
        result = validate_invoice_form(_form(amount=amount))

        assert isinstance(result, ValidationFailure)
        assert result.errors == {"amount": [AMOUNT_NOT_POSITIVE_MESSAGE]}

    def test_zero_amount_message_mentions_greater_than_zero(self):
        result = validate_invoice_form(_form(amount="0"))

        assert isinstance(result, ValidationFailure)
        assert "enter an amount greater than $0" in result.errors["amount"][0]

    @pytest.mark.parametrize("amount", ["abc", "12,50", "NaN", "Infinity", "1e"])
    def test_non_numeric_amount_gets_field_specific_error(self, amount):
        result = validate_invoice_form(_form(amount=amount))

        assert isinstance(result, ValidationFailure)
        assert result.errors == {"amount": [AMOUNT_INVALID_MESSAGE]}

    @pytest.mark.parametrize(
        "amount",
        ["1e30", "99999999999999999999999999999", "1e1000000", "21474836.48"],
    )
    def test_amount_above_column_limit_is_rejected(self, amount):
        result = validate_invoice_form(_form(amount=amount))

        assert isinstance(result, ValidationFailure)
        assert result.errors == {"amount": [AMOUNT_TOO_LARGE_MESSAGE]}

    def test_amount_at_column_limit_is_accepted(self):
        result = validate_invoice_form(_form(amount="21474836.47"))

        assert isinstance(result, ValidationSuccess)
        assert result.data.amount == Decimal("21474836.47")

    def test_too_large_message_names_the_limit(self):
        assert "$21,474,836.47" in AMOUNT_TOO_LARGE_MESSAGE

    @pytest.mark.parametrize("status", ["", None, "PAID", "overdue", "pending "])
    def test_unknown_status_is_rejected(self, status):
        result = validate_invoice_form(_form(status=status))

        assert isinstance(result, ValidationFailure)
        assert result.errors == {"status": [STATUS_REQUIRED_MESSAGE]}

    @pytest.mark.parametrize("customer_id", ["", "   ", None])
    def test_missing_customer_is_rejected(self, customer_id):
        result = validate_invoice_form(_form(customerId=customer_id))

        assert isinstance(result, ValidationFailure)
        assert result.errors == {"customerId": [CUSTOMER_REQUIRED_MESSAGE]}

    def test_every_failing_field_is_reported(self):
        result = validate_invoice_form({})

        assert isinstance(result, ValidationFailure)
        assert set(result.errors) == {"customerId", "amount", "status"}

    def test_client_supplied_id_and_date_are_ignored(self):
        result = validate_invoice_form(_form(id="forged", date="1999-01-01"))

        assert isinstance(result, ValidationSuccess)
        assert "id" not in result.data.model_dump()
        assert "date" not in result.data.model_dump()


class TestValidateCredentials:
    """Tests for validate_credentials."""

    def test_valid_credentials(self):
        credentials = validate_credentials({"email": "user@nextmail.com", "password": "123456"})

        assert credentials is not None
        assert credentials.email == "user@nextmail.com"

    @pytest.mark.parametrize("email", ["", "user", "user@", "@nextmail.com", "us er@nextmail.com", None])
    def test_malformed_email_is_rejected(self, email):
        assert validate_credentials({"email": email, "password": "123456"}) is None

    def test_short_password_is_rejected(self):
        assert validate_credentials({"email": "user@nextmail.com", "password": "12345"}) is None

    def test_email_case_is_preserved(self):
        credentials = validate_credentials({"email": "User@NextMail.com", "password": "123456"})

        assert credentials.email == "User@NextMail.com"
