"""
Rounding helpers shared by the analytics services.

Python's built-in round() uses banker's rounding (round(2.5) == 2). Scores,
adherence percentages and estimated 1RM values round half away from zero so
that 89.5% grades the same way it reads.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, places: int = 0) -> float:
    """Round to `places` decimals, halves away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float) -> int:
    return int(round_half_up(value))
