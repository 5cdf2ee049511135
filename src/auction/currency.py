"""
Currency helpers: dollars to integer cents and back.

All amounts inside the auction are integer cents; conversion happens once at
the human-facing edge.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENTS_PER_DOLLAR = 100

Amount = Union[int, float, str, Decimal]


def dollars_to_cents(amount: Amount) -> int:
    """
    Convert a dollar amount to whole cents, rounding half up.

    Floats go through their shortest repr so 10.99 becomes 1099, not 1098.

    Raises:
        ValueError: If amount is not numeric or is negative
    """
    if isinstance(amount, bool):
        raise ValueError(f"Amount must be numeric, got {amount!r}")

    try:
        value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    except (InvalidOperation, TypeError):
        raise ValueError(f"Amount must be numeric, got {amount!r}")

    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {amount!r}")
    if value < 0:
        raise ValueError(f"Amount must be non-negative, got {amount!r}")

    try:
        cents = (value * CENTS_PER_DOLLAR).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount too large to convert to cents: {amount!r}")
    return int(cents)


def format_cents(cents: int) -> str:
    """Render cents as a dollar string, e.g. 8500 -> '85.00'."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(cents), CENTS_PER_DOLLAR)
    return f"{sign}{whole}.{frac:02d}"
