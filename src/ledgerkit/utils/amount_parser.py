"""Money parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

from ledgerkit.domain.errors import ValidationError

# Currency markers accepted around an amount
_CURRENCY_PATTERN = re.compile(r"(EGP|USD|EUR|ج\.م|[$€£])", re.IGNORECASE)


def parse_money(amount_str: str, allow_negative: bool = False) -> Decimal:
    """Parse an amount string into an exact Decimal.

    Accepts "1234.5", "1,234.50", "EGP 1,234.50", "$12" and the accounting
    form "(12.00)" for negative amounts. No rounding is applied.

    Args:
        amount_str: Amount string
        allow_negative: Accept negative amounts

    Returns:
        Decimal amount

    Raises:
        ValidationError: If the string is not an amount, or is negative
            when negatives are not allowed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValidationError("Empty amount")

    text = str(amount_str).strip()
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    text = _CURRENCY_PATTERN.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValidationError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValidationError(f"Could not parse amount '{amount_str}'")

    if negative:
        amount = -amount
    if amount < 0 and not allow_negative:
        raise ValidationError(f"Amount must not be negative: '{amount_str}'")
    return amount
