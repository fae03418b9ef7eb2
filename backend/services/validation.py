"""
Explicit validation for invoice form submissions and login input.

Each validator takes the raw string fields of a submission and returns a
tagged result. Nothing here raises on bad input; callers branch on the result
type. Error keys use the form field names (customerId, amount, status) so the
templates can place messages next to their inputs.
"""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException, InvalidOperation
from typing import Dict, List, Mapping, Optional, Union

from backend.schemas.auth import Credentials
from backend.schemas.invoices import InvoiceFormData
from backend.utils.constants import INVOICE_STATUSES, MAX_INVOICE_AMOUNT_CENTS
from backend.utils.formatting import cents_to_major, format_currency, to_minor_units

logger = logging.getLogger(__name__)

CUSTOMER_REQUIRED_MESSAGE = "Please select a customer."
AMOUNT_INVALID_MESSAGE = "Please enter a valid amount."
AMOUNT_NOT_POSITIVE_MESSAGE = "Please enter an amount greater than $0."
STATUS_REQUIRED_MESSAGE = "Please select an invoice status."
AMOUNT_TOO_LARGE_MESSAGE = (
    f"Please enter an amount no greater than {format_currency(MAX_INVOICE_AMOUNT_CENTS)}."
)

MAX_AMOUNT = cents_to_major(MAX_INVOICE_AMOUNT_CENTS)

MIN_PASSWORD_LENGTH = 6

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class ValidationSuccess:
    data: InvoiceFormData


@dataclass(frozen=True)
class ValidationFailure:
    errors: Dict[str, List[str]] = field(default_factory=dict)


ValidationResult = Union[ValidationSuccess, ValidationFailure]


def _coerce_amount(raw: Optional[str]) -> Optional[Decimal]:
    """
    Coerce a raw amount field to a finite Decimal.

    A missing or blank field coerces to 0 (so it fails the > 0 rule with the
    amount message rather than a generic one). Returns None when the value is
    not a finite number.
    """
    text = (raw or "").strip()
    if not text:
        return Decimal(0)

    try:
        value = Decimal(text)
    except InvalidOperation:
        return None

    if not value.is_finite():
        return None

    return value


def _amount_error(amount: Optional[Decimal]) -> Optional[str]:
    """
    Check a coerced amount against the invoices.amount column.

    The magnitude is compared before converting to cents, so huge exponents
    never reach quantize().
    """
    if amount is None:
        return AMOUNT_INVALID_MESSAGE
    if amount > MAX_AMOUNT:
        return AMOUNT_TOO_LARGE_MESSAGE
    if amount <= 0:
        return AMOUNT_NOT_POSITIVE_MESSAGE

    try:
        amount_in_cents = to_minor_units(amount)
    except DecimalException:
        return AMOUNT_INVALID_MESSAGE

    if amount_in_cents <= 0:
        return AMOUNT_NOT_POSITIVE_MESSAGE
    return None


def validate_invoice_form(raw: Mapping[str, Optional[str]]) -> ValidationResult:
    """
    Validate a create/update invoice submission.

    Rules:
    - customerId: non-empty reference string
    - amount: coerces to a number strictly greater than 0 (and at least one
      cent once rounded), and at most MAX_AMOUNT
    - status: exactly "pending" or "paid"

    Every failing field is reported, not just the first one.

    Args:
        raw: Submitted form fields (string values, possibly missing)

    Returns:
        ValidationSuccess with a typed InvoiceFormData, or ValidationFailure
        mapping field name -> list of messages.
    """
    errors: Dict[str, List[str]] = {}

    customer_id = (raw.get("customerId") or "").strip()
    if not customer_id:
        errors.setdefault("customerId", []).append(CUSTOMER_REQUIRED_MESSAGE)

    amount = _coerce_amount(raw.get("amount"))
    amount_error = _amount_error(amount)
    if amount_error:
        errors.setdefault("amount", []).append(amount_error)

    status = raw.get("status")
    if status not in INVOICE_STATUSES:
        errors.setdefault("status", []).append(STATUS_REQUIRED_MESSAGE)

    if errors:
        logger.debug(f"Invoice form rejected: fields={sorted(errors)}")
        return ValidationFailure(errors=errors)

    return ValidationSuccess(
        data=InvoiceFormData(customer_id=customer_id, amount=amount, status=status)
    )


def validate_credentials(raw: Mapping[str, Optional[str]]) -> Optional[Credentials]:
    """
    Shape-check login input.

    The email must be syntactically valid and the password at least
    MIN_PASSWORD_LENGTH characters. Returns None on any failure; the caller
    treats that exactly like a wrong password.
    """
    email = (raw.get("email") or "").strip()
    password = raw.get("password") or ""

    if not _EMAIL_PATTERN.match(email):
        return None
    if len(password) < MIN_PASSWORD_LENGTH:
        return None

    return Credentials(email=email, password=password)
