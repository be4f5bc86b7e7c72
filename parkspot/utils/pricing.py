from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union
from parkspot.utils.intervals import duration_hours

CENTS = Decimal("0.01")


def round_currency(amount: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_total_cost(start: datetime, end: datetime, hourly_rate: Union[Decimal, str, int, float]) -> Decimal:
    # str() keeps float rates from dragging binary noise into the Decimal
    rate = hourly_rate if isinstance(hourly_rate, Decimal) else Decimal(str(hourly_rate))
    return round_currency(duration_hours(start, end) * rate)
