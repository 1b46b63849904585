"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from savetrack.utils.money import to_money


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money string into a two-place Decimal.

    Handles:
    - "1500", "1500.5"
    - "$1,500.00"
    - "-20.00" and "(20.00)" (negative)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount rounded to cents

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥,\s]", "", amount_str)

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got '{amount_str}'")

    return to_money(-amount if is_negative else amount)
