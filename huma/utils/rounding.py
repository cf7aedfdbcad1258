from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]


def round_half_up(value: Number, digits: int = 0) -> float:
    """
    Round halves away from zero: 2.5 -> 3 (builtin round() gives 2), 6.45 -> 6.5.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def percent(part: int, total: int) -> int:
    """
    Whole-number percentage of part over total, 0 when total is 0.
    """
    if not total:
        return 0
    ratio = Decimal(part * 100) / Decimal(total)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))
