"""Tests for the currency table."""

from tier_pricing.currency import CURRENCIES, DEFAULT_CURRENCY, format_amount, get_currency, is_supported


def test_codes_are_unique() -> None:
    """Every code appears once."""
    codes = [c.code for c in CURRENCIES]
    assert len(codes) == len(set(codes))
    assert DEFAULT_CURRENCY.code == "USD"


def test_lookup_is_case_insensitive() -> None:
    """Codes are matched regardless of case."""
    assert is_supported("eur")
    assert get_currency("eur").symbol == "€"


def test_unknown_code_falls_back_to_usd() -> None:
    """Unknown codes resolve to the default currency."""
    assert not is_supported("XYZ")
    assert get_currency("XYZ") == DEFAULT_CURRENCY


def test_format_amount() -> None:
    """Amounts get the symbol, thousands separators and two decimals."""
    assert format_amount(1250) == "$1,250.00"
    assert format_amount(3.5, "GBP") == "£3.50"
    assert format_amount(1000, "JPY", decimals=0) == "¥1,000"
