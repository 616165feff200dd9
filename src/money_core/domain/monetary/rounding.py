from __future__ import annotations

from decimal import (
    Decimal,
    Inexact,
    InvalidOperation,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
)
from enum import Enum

from money_core.utils.decimal_tools import MONEY_CONTEXT


class RoundingMode(Enum):
    """Rounding policies used whenever an amount must be rescaled to fewer fraction digits.

    UNNECESSARY asserts that the rescale is exact; it fails instead of rounding.
    """

    UP = "UP"
    DOWN = "DOWN"
    CEILING = "CEILING"
    FLOOR = "FLOOR"
    HALF_UP = "HALF_UP"
    HALF_DOWN = "HALF_DOWN"
    HALF_EVEN = "HALF_EVEN"
    UNNECESSARY = "UNNECESSARY"

    @classmethod
    def from_str(cls, name: str) -> RoundingMode:
        """Look up a mode by name, case-insensitive (e.g. "half_even")."""
        try:
            return cls[name.strip().upper()]
        except KeyError as e:
            raise ValueError(f"Unknown rounding mode '{name}'. Available modes: {[m.name for m in cls]}") from e


_DECIMAL_ROUNDING = {
    RoundingMode.UP: ROUND_UP,
    RoundingMode.DOWN: ROUND_DOWN,
    RoundingMode.CEILING: ROUND_CEILING,
    RoundingMode.FLOOR: ROUND_FLOOR,
    RoundingMode.HALF_UP: ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: ROUND_HALF_DOWN,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
}

# Unit scale factors 10^-n for the fraction-digit counts used by nearly every currency
_CACHED_FACTORS: tuple[Decimal, ...] = tuple(Decimal(1).scaleb(-n) for n in range(5))


def cent_factor(fraction_digits: int) -> Decimal:
    """Return the value of one smallest unit at $fraction_digits, i.e. 10^-$fraction_digits.

    Factors for 0 to 4 fraction digits are precomputed at import; others are computed on demand.
    """
    if 0 <= fraction_digits < len(_CACHED_FACTORS):
        return _CACHED_FACTORS[fraction_digits]
    return Decimal(1).scaleb(-fraction_digits)


def set_scale(amount: Decimal, scale: int, mode: RoundingMode) -> Decimal:
    """Rescale $amount to exactly $scale fraction digits.

    Args:
        amount: Value to rescale.
        scale: Target number of digits after the decimal point.
        mode: Rounding applied when digits are dropped.

    Returns:
        Decimal whose exponent is exactly -$scale.

    Raises:
        ValueError: If $mode is UNNECESSARY and the rescale would need rounding, or the result needs more
            significant digits than the money context holds.
    """
    try:
        if mode is RoundingMode.UNNECESSARY:
            context = MONEY_CONTEXT.copy()
            context.traps[Inexact] = True
            return amount.quantize(cent_factor(scale), context=context)
        return amount.quantize(cent_factor(scale), rounding=_DECIMAL_ROUNDING[mode], context=MONEY_CONTEXT)
    except Inexact as e:
        raise ValueError(f"Cannot call `set_scale` because $amount ({amount}) is not representable with {scale} fraction digits without rounding") from e
    except InvalidOperation as e:
        raise ValueError(f"Cannot call `set_scale` because $amount ({amount}) needs more than {MONEY_CONTEXT.prec} significant digits at {scale} fraction digits") from e


def to_units(amount: Decimal, fraction_digits: int) -> int:
    """Return $amount as an exact integer count of 10^-$fraction_digits units.

    Raises:
        ValueError: If $amount has more than $fraction_digits significant fraction digits.
    """
    return int(set_scale(amount, fraction_digits, RoundingMode.UNNECESSARY).scaleb(fraction_digits, context=MONEY_CONTEXT))
