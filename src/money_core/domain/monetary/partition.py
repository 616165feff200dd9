from __future__ import annotations

from typing import Sequence


def partition_units(units: int, ratios: Sequence[int]) -> list[int]:
    """Split $units into integer shares proportional to $ratios, conserving the total.

    Each share starts as the truncated proportional part `units * ratio / sum(ratios)`. The units lost to
    truncation are then handed out one by one to the first shares in input order, so the result always
    sums to $units. Ties are broken by position, never by ratio size.

    Example:
        >>> partition_units(5, (3, 7))
        [2, 3]

    Args:
        units: Amount as an integer count of its smallest unit. May be negative.
        ratios: Non-empty sequence of positive integer weights.

    Returns:
        list[int]: One share per ratio, in the order of $ratios.

    Raises:
        ValueError: If $ratios is empty or contains a non-positive value.
        TypeError: If a ratio is not an int.
    """
    # Raise: at least one share is needed to hold the amount
    if len(ratios) == 0:
        raise ValueError("Cannot call `partition_units` because $ratios is empty")

    for ratio in ratios:
        # Raise: ratios are integer weights
        if not isinstance(ratio, int) or isinstance(ratio, bool):
            raise TypeError(f"Cannot call `partition_units` because ratio {ratio!r} is not int")
        # Raise: a non-positive ratio makes the proportions meaningless
        if ratio <= 0:
            raise ValueError(f"Cannot call `partition_units` because ratio {ratio} is not positive")

    total = sum(ratios)
    sign = -1 if units < 0 else 1
    magnitude = abs(units)

    # Truncate toward zero, like integer division on the absolute value
    shares = [magnitude * ratio // total for ratio in ratios]
    remainder = magnitude - sum(shares)

    adjusted = []
    for share in shares:
        remainder -= 1
        adjusted.append(sign * (share + (1 if remainder >= 0 else 0)))
    return adjusted
