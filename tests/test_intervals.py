from datetime import datetime, timedelta
from decimal import Decimal
import pytest
from parkspot.errors import InvalidTimestampError
from parkspot.utils.intervals import duration_hours, intervals_overlap, parse_timestamp
from parkspot.utils.pricing import compute_total_cost, round_currency

T = datetime(2030, 1, 2, 10, 0)


def h(hours):
    return T + timedelta(hours=hours)


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ((h(0), h(2)), (h(1), h(3)), True),    # partial overlap at the end
        ((h(1), h(3)), (h(0), h(2)), True),    # partial overlap at the start
        ((h(0), h(4)), (h(1), h(2)), True),    # containment
        ((h(1), h(2)), (h(0), h(4)), True),    # contained
        ((h(0), h(2)), (h(0), h(2)), True),    # identical
        ((h(0), h(2)), (h(2), h(4)), False),   # back-to-back
        ((h(2), h(4)), (h(0), h(2)), False),   # back-to-back, reversed
        ((h(0), h(1)), (h(3), h(4)), False),   # disjoint
    ],
)
def test_intervals_overlap_is_half_open(first, second, expected):
    assert intervals_overlap(*first, *second) is expected
    assert intervals_overlap(*second, *first) is expected


def test_parse_timestamp_converts_aware_values_to_naive_utc():
    assert parse_timestamp("2030-01-02T12:00:00+02:00") == datetime(2030, 1, 2, 10, 0)
    assert parse_timestamp("2030-01-02T10:00:00Z") == datetime(2030, 1, 2, 10, 0)


def test_parse_timestamp_keeps_naive_values():
    assert parse_timestamp(T) == T
    assert parse_timestamp("2030-01-02T10:00:00") == T


@pytest.mark.parametrize("value", ["not-a-date", "2030-13-45T99:00", 12345])
def test_parse_timestamp_rejects_garbage(value):
    with pytest.raises(InvalidTimestampError):
        parse_timestamp(value)


def test_duration_hours_is_exact():
    assert duration_hours(T, h(2)) == Decimal(2)
    assert duration_hours(T, T + timedelta(minutes=90)) == Decimal("1.5")
    assert duration_hours(T, T + timedelta(minutes=59)) < 1


def test_total_cost_two_hours_at_ten():
    assert compute_total_cost(T, h(2), Decimal("10.00")) == Decimal("20.00")


def test_total_cost_prices_fractional_hours():
    assert compute_total_cost(T, T + timedelta(minutes=90), Decimal("7.50")) == Decimal("11.25")
    assert compute_total_cost(T, T + timedelta(minutes=80), Decimal("10.00")) == Decimal("13.33")


def test_total_cost_rounds_half_up():
    # 1.25h * 0.10 = 0.125
    assert compute_total_cost(T, T + timedelta(minutes=75), Decimal("0.10")) == Decimal("0.13")
    assert round_currency(Decimal("2.675")) == Decimal("2.68")


def test_total_cost_accepts_float_rates():
    assert compute_total_cost(T, h(3), 0.1) == Decimal("0.30")
