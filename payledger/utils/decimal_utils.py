"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWOPLACES = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value) -> Decimal:
    """Coerce a value to a Decimal rounded to cents.

    Args:
        value: Raw numeric value (int, float, str or Decimal).

    Returns:
        Decimal: Value quantized to two decimal places.

    Raises:
        ValueError: If the value cannot be parsed as a number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric amount: {value!r}")
    try:
        amount = coerce_decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Not a numeric amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    return amount.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


__all__ = ["TWOPLACES", "coerce_decimal", "to_money"]
