"""
Currency unit conversion

Amounts inside the engine are integers in the smallest currency unit.
These helpers convert between display units (e.g. "1.5" ether) and base units.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

DEFAULT_DECIMALS = 18  # ether -> wei

Number = Union[int, str, Decimal]


def to_base_units(value: Number, decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Convert a display amount to integer base units.

    Args:
        value: Amount in display units. Floats are refused to avoid binary rounding.
        decimals: Number of decimal places of the currency

    Returns:
        Amount in base units

    Raises:
        ValueError: If the value is not numeric, is a float, or has more
            precision than the currency supports
    """
    if isinstance(value, (float, bool)):
        raise ValueError(f"Unsupported amount type: {type(value).__name__}")
    if decimals < 0:
        raise ValueError("decimals must be >= 0")

    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")

    scaled = amount.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{value} has more than {decimals} decimal places")
    return int(scaled)


def from_base_units(amount: int, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """Convert integer base units back to a display Decimal"""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Base units must be an int, got {type(amount).__name__}")
    return Decimal(amount).scaleb(-decimals)


__all__ = ["DEFAULT_DECIMALS", "to_base_units", "from_base_units"]
