"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

from spendwise.domain.money import Money

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")


def parse_amount(amount_str: str) -> Money:
    """Parse user input into Money.

    Accepts plain numbers and common decorations:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "-$12" or "(12.00)" for negative values

    Args:
        amount_str: Amount string

    Returns:
        Money rounded to cents

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()

    negative = False
    if text.startswith("(") and text.endswith(")"):
        negative = True
        text = text[1:-1]
    if text.startswith("-"):
        negative = not negative
        text = text[1:]

    text = _CURRENCY_SYMBOLS.sub("", text).replace(",", "").strip()

    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")
    if not value.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")

    return Money.of(-value if negative else value)
