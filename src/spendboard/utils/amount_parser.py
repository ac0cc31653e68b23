"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Any


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "-123.45"
    - "1,234.56"
    - "1 234,56" (space thousands, comma decimal)
    - "1.234,56" (dot thousands, comma decimal)
    - "1234,5" (comma decimal)
    - "(123.45)" (negative in parentheses)
    - "€123.45", "123.45 MAD"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = re.sub(r"[$€£¥]|MAD|EUR|DH", "", amount_str, flags=re.IGNORECASE)

    # Remove thousands separators made of spaces (including non-breaking ones)
    amount_str = re.sub(r"\s", "", amount_str)

    if "," in amount_str and "." in amount_str:
        # The separator that comes last is the decimal mark
        if amount_str.rfind(",") > amount_str.rfind("."):
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            amount_str = amount_str.replace(",", "")
    elif re.fullmatch(r"-?\d+,\d{1,2}", amount_str):
        amount_str = amount_str.replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    if is_negative:
        amount = -amount
    return amount


def parse_cell_amount(value: Any) -> Decimal:
    """Parse a raw spreadsheet cell into a Decimal.

    Numeric cells are converted directly (floats through their shortest
    string form so 0.1 stays 0.1); text cells go through parse_amount.

    Raises:
        ValueError: If the cell is empty, boolean, or not a number
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Not an amount: {value!r}")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        amount = Decimal(repr(value))
        if not amount.is_finite():
            raise ValueError(f"Not an amount: {value!r}")
        return amount
    if isinstance(value, str):
        return parse_amount(value)
    raise ValueError(f"Not an amount: {value!r}")
