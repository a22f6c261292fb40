from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from borrowings.fines import calculate_fine, hours_late

DUE = datetime(2025, 3, 1, 12, 0, tzinfo=dt_timezone.utc)


def test_no_fine_before_due_date():
    assert calculate_fine(DUE, DUE - timedelta(days=2)) == Decimal("0.00")


def test_no_fine_at_exact_due_instant():
    assert calculate_fine(DUE, DUE) == Decimal("0.00")


def test_partial_hour_counts_as_full_hour():
    assert calculate_fine(DUE, DUE + timedelta(microseconds=1)) == Decimal("0.10")
    assert calculate_fine(DUE, DUE + timedelta(minutes=59)) == Decimal("0.10")


def test_whole_hours_are_not_rounded_up():
    assert calculate_fine(DUE, DUE + timedelta(hours=1)) == Decimal("0.10")
    assert calculate_fine(DUE, DUE + timedelta(hours=1, seconds=1)) == Decimal("0.20")


def test_one_day_late_costs_two_forty():
    assert calculate_fine(DUE, DUE + timedelta(days=1)) == Decimal("2.40")


def test_fine_is_quantized_to_cents():
    fine = calculate_fine(DUE, DUE + timedelta(days=30, minutes=1))
    assert fine == Decimal("72.10")
    assert fine.as_tuple().exponent == -2


def test_fine_never_decreases_as_time_passes():
    fines = [
        calculate_fine(DUE, DUE + timedelta(minutes=17 * step))
        for step in range(-10, 200)
    ]
    assert fines == sorted(fines)


def test_hours_late_matches_ceiling_rule():
    assert hours_late(DUE, DUE - timedelta(hours=3)) == 0
    assert hours_late(DUE, DUE + timedelta(hours=2, minutes=30)) == 3
    assert hours_late(DUE, DUE + timedelta(days=2)) == 48
