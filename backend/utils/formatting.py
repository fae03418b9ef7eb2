"""
Display helpers for the server-rendered pages.

Amounts are stored as integer cents; everything here converts back to major
units only for display.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Union


def cents_to_major(amount_in_cents: int) -> Decimal:
    """Convert integer cents to a 2-decimal Decimal in major units."""
    return (Decimal(amount_in_cents) / Decimal(100)).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )


def format_currency(amount_in_cents: int) -> str:
    """
    Format an amount stored in cents as US dollars.

    >>> format_currency(4999)
    '$49.99'
    >>> format_currency(123456)
    '$1,234.56'
    """
    major = cents_to_major(amount_in_cents)
    sign = "-" if major < 0 else ""
    return f"{sign}${abs(major):,.2f}"


def format_date_to_local(value: Union[str, date, datetime]) -> str:
    """
    Format an ISO calendar date for display (e.g. 'Oct 19, 2026').

    Unparseable strings are returned unchanged.
    """
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            return value
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def generate_pagination(current_page: int, total_pages: int) -> List[Union[int, str]]:
    """
    Build the list of page links to show, collapsing long ranges with '...'.

    >>> generate_pagination(1, 5)
    [1, 2, 3, 4, 5]
    >>> generate_pagination(2, 10)
    [1, 2, 3, '...', 9, 10]
    >>> generate_pagination(5, 10)
    [1, '...', 4, 5, 6, '...', 10]
    """
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        return [1, 2, 3, "...", total_pages - 1, total_pages]

    if current_page >= total_pages - 2:
        return [1, 2, "...", total_pages - 2, total_pages - 1, total_pages]

    return [
        1,
        "...",
        current_page - 1,
        current_page,
        current_page + 1,
        "...",
        total_pages,
    ]


def to_minor_units(amount: Decimal) -> int:
    """
    Convert a major-unit amount to integer cents, rounding half up.

    >>> to_minor_units(Decimal("49.99"))
    4999
    >>> to_minor_units(Decimal("0.005"))
    1
    """
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
