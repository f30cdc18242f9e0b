from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 0) -> float:
    """Round to `places` decimals with halves going away from zero."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def round_money(value: float) -> int:
    """Monetary amounts are stored in whole currency units."""
    return int(round_half_up(value))


def round_hours(value: float) -> float:
    return round_half_up(value, 2)
