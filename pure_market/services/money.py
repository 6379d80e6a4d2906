"""Cents arithmetic and display formatting.

Currency crosses every boundary as cents. Sums are taken on ``Decimal`` so
totals do not depend on input order; conversion to dollars happens only at
display time (and for chart series).
"""

from decimal import Decimal, ROUND_HALF_UP

from pure_market.utils.constants import MATERIAL_FAMILIES, DEFAULT_MATERIAL_FAMILY

_CENTS_PER_DOLLAR = Decimal(100)
_TWO_PLACES = Decimal("0.01")


def to_decimal(value: int | float | Decimal) -> Decimal:
    """Decimal for an int, float or Decimal amount.

    Floats go through their shortest repr, so a stored 1000.05 stays 1000.05
    rather than its binary approximation.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def gross_amount(price: int | float, quantity: int) -> Decimal:
    """Gross transaction amount in cents: price x quantity."""
    return to_decimal(price) * quantity


def to_number(value: Decimal) -> int | float:
    """Collapse a Decimal back to int when integral, else float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def round_dollars(value: Decimal) -> Decimal:
    return value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def cents_to_dollars(cents: int | float | Decimal | None) -> Decimal:
    """Convert cents to a dollar amount rounded half-up to 2 places."""
    if cents is None:
        return Decimal("0.00")
    return round_dollars(to_decimal(cents) / _CENTS_PER_DOLLAR)


def format_dollars(cents: int | float | Decimal | None) -> str:
    """'1,234.56' for 123456 cents."""
    return f"{cents_to_dollars(cents):,.2f}"


def format_currency(cents: int | float | Decimal | None) -> str:
    """'$1,234.56'; a missing amount renders as '$0.00'.

    Negative amounts keep the sign after the symbol ('$-1.00').
    """
    return f"${format_dollars(cents)}"


def format_percentage(value: float) -> str:
    return f"{round_dollars(to_decimal(value)):.2f}%"


def format_ratio(ratio: float | None) -> str:
    if ratio is None:
        return "N/A"
    return f"{round_dollars(to_decimal(ratio)):.2f}"


def format_quantity(quantity: int | None) -> str:
    return str(quantity or 0)


def material_family(material: str) -> str:
    """Badge family for a material name ('Gold Bar' -> 'gold')."""
    lowered = material.lower()
    for family in MATERIAL_FAMILIES:
        if family in lowered:
            return family
    return DEFAULT_MATERIAL_FAMILY
