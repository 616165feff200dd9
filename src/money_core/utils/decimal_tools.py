from __future__ import annotations

from decimal import Context, Decimal, ROUND_HALF_EVEN
from typing import TypeAlias


# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

# Same precision as a 128-bit decimal; arithmetic on money amounts runs inside this context
MONEY_CONTEXT = Context(prec=34, rounding=ROUND_HALF_EVEN)


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        TypeError: If $value is not a `DecimalLike` scalar.
    """
    if isinstance(value, Decimal):
        return value

    # Raise: bool is an int subclass, but never a meaningful amount
    if isinstance(value, bool) or not isinstance(value, (int, str, float)):
        raise TypeError(f"Cannot call `as_decimal` because $value has unsupported type '{type(value).__name__}'")

    return Decimal(str(value))


def is_decimal_like(value: object) -> bool:
    """Return True if $value can be passed to `as_decimal`."""
    return isinstance(value, (Decimal, int, str, float)) and not isinstance(value, bool)


def scale_of(value: Decimal) -> int:
    """Return the number of digits after the decimal point of $value.

    Mirrors the notion of "scale": `Decimal("12.30")` has scale 2, `Decimal("12")` has scale 0
    and `Decimal("1E+2")` has scale -2.
    """
    return -value.as_tuple().exponent


def to_plain_string(value: Decimal) -> str:
    """Format $value without exponent notation, keeping all of its fraction digits."""
    return f"{value:f}"
