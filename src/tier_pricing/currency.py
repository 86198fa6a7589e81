"""Currency table used for labels.

Amounts are never converted; the currency only decides which symbol is
printed next to them.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Currency:
    """An ISO currency code and its display symbol."""

    code: str
    symbol: str


CURRENCIES: Tuple[Currency, ...] = (
    Currency("USD", "$"),
    Currency("EUR", "€"),
    Currency("GBP", "£"),
    Currency("JPY", "¥"),
    Currency("CHF", "CHF"),
    Currency("CAD", "CA$"),
    Currency("AUD", "A$"),
    Currency("CNY", "¥"),
    Currency("INR", "₹"),
    Currency("BRL", "R$"),
    Currency("KRW", "₩"),
    Currency("CZK", "Kč"),
    Currency("PLN", "zł"),
)

DEFAULT_CURRENCY = CURRENCIES[0]

_BY_CODE: Dict[str, Currency] = {c.code: c for c in CURRENCIES}


def is_supported(code: str) -> bool:
    """Check whether ``code`` is a known currency code (case-insensitive)."""
    return code.upper() in _BY_CODE


def get_currency(code: str) -> Currency:
    """Look up a currency by code, falling back to USD for unknown codes."""
    return _BY_CODE.get(code.upper(), DEFAULT_CURRENCY)


def format_amount(value: float, currency: str = "USD", decimals: int = 2) -> str:
    """Render an amount with its currency symbol, e.g. ``$1,250.00``."""
    return f"{get_currency(currency).symbol}{value:,.{decimals}f}"
