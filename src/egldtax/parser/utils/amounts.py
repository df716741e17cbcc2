"""Decimal shifting for smallest-unit integers. No binary floats anywhere."""

from decimal import Decimal, InvalidOperation


def shift_decimals(raw_value: int, decimals: int) -> Decimal:
    """Exact raw_value / 10**decimals. Built from the digit string, so no context rounding."""
    if decimals <= 0:
        return Decimal(raw_value)
    return Decimal(f"{raw_value}E-{decimals}")


def format_amount(value: Decimal) -> str:
    """Plain decimal string with trailing zeros dropped ("1.500" -> "1.5", "0E-18" -> "0")."""
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def format_units(raw_value: int, decimals: int) -> str:
    return format_amount(shift_decimals(raw_value, decimals))


def to_decimal(text: str | None) -> Decimal:
    """Parse a display amount; anything unparsable counts as zero."""
    try:
        return Decimal(text or "0")
    except InvalidOperation:
        return Decimal(0)
