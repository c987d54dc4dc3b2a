"""Currency and percentage formatting for display.

Presentation only: the strings produced here are not meant to be parsed
back into numbers.
"""

import math
from typing import Union

from folio.signals.models import CurrencyCode

NOT_AVAILABLE = "N/A"

CURRENCY_SYMBOLS: dict[str, str] = {
    CurrencyCode.USD.value: "$",
    CurrencyCode.INR.value: "₹",
    CurrencyCode.EUR.value: "€",
    CurrencyCode.GBP.value: "£",
}


def currency_symbol(currency: Union[CurrencyCode, str]) -> str:
    """Return the symbol for *currency*, or the code itself if it has none."""
    code = _code(currency)
    return CURRENCY_SYMBOLS.get(code, code)


def format_currency(amount: float, currency: Union[CurrencyCode, str]) -> str:
    """Render *amount* with two decimals in the grouping *currency* uses.

    INR uses lakh/crore grouping (``₹12,34,567.50``); every other currency
    uses thousands grouping (``-$1,234.50``).  The sign always precedes
    the symbol.  NaN and infinite amounts render as ``"N/A"``.
    """
    if not math.isfinite(amount):
        return NOT_AVAILABLE
    code = _code(currency)
    sign = "-" if amount < 0 else ""
    fixed = f"{abs(amount):.2f}"

    if code == CurrencyCode.INR.value:
        integer, fraction = fixed.split(".")
        return f"{sign}₹{group_indian(integer)}.{fraction}"

    symbol = CURRENCY_SYMBOLS.get(code)
    grouped = f"{abs(amount):,.2f}"
    if symbol is None:
        return f"{sign}{code} {grouped}"
    return f"{sign}{symbol}{grouped}"


def group_indian(digits: str) -> str:
    """Insert lakh/crore separators into a string of integer digits.

    The last three digits form one group; everything to the left is
    grouped in pairs: ``"1234567"`` → ``"12,34,567"``.
    """
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_percentage(value: float) -> str:
    """Signed two-decimal percentage: ``+20.00%``, ``-3.10%``.

    NaN and infinite values render as ``"N/A"``.
    """
    if not math.isfinite(value):
        return NOT_AVAILABLE
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    return f"{'+' if value >= 0 else ''}{value:.2f}%"


def profit_loss_tone(value: float) -> str:
    """Colour hint for a P/L value: ``success``, ``error`` or ``default``."""
    if value > 0:
        return "success"
    if value < 0:
        return "error"
    return "default"


def _code(currency: Union[CurrencyCode, str]) -> str:
    if isinstance(currency, CurrencyCode):
        return currency.value
    return str(currency).upper()
