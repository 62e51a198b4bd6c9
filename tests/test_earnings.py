"""
Earnings and funds arithmetic
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from services import earnings
from utils.exceptions import InsufficientFundsError

RATE = Decimal("15")


class TestEarnings:
    """Call earnings, payments and pending balance"""

    def test_total_earnings_is_count_times_rate(self):
        assert earnings.total_earnings(0, RATE) == Decimal("0")
        assert earnings.total_earnings(7, RATE) == Decimal("105")

    def test_negative_call_count_rejected(self):
        with pytest.raises(ValueError):
            earnings.total_earnings(-1, RATE)

    def test_total_paid_ignores_cancelled(self):
        payments = [
            {"amount": Decimal("100"), "status": "Issued"},
            {"amount": Decimal("50.50"), "status": "Credited"},
            {"amount": Decimal("999"), "status": "Cancelled"},
        ]
        assert earnings.total_paid(payments) == Decimal("150.50")

    def test_total_paid_of_no_payments_is_zero(self):
        assert earnings.total_paid([]) == Decimal("0")

    def test_pending_balance(self):
        # 20 calls x 15 = 300 earned, 120 paid
        assert earnings.pending_balance(20, Decimal("120"), RATE) == Decimal("180")

    def test_pending_balance_negative_after_advance(self):
        assert earnings.pending_balance(2, Decimal("100"), RATE) == Decimal("-70")


class TestFundsFloor:
    """Crediting must not take company funds below the floor"""

    def test_credit_within_funds_returns_remaining(self):
        assert earnings.ensure_funds_floor(Decimal("500"), Decimal("200"), Decimal("0")) == Decimal("300")

    def test_credit_down_to_exact_floor_allowed(self):
        assert earnings.ensure_funds_floor(Decimal("500"), Decimal("400"), Decimal("100")) == Decimal("100")

    def test_credit_below_floor_raises(self):
        with pytest.raises(InsufficientFundsError) as exc_info:
            earnings.ensure_funds_floor(Decimal("100"), Decimal("150"), Decimal("0"))

        error = exc_info.value
        assert error.status_code == 409
        assert error.balance == Decimal("100")
        assert error.amount == Decimal("150")
        assert error.floor == Decimal("0")


def _call(outcome, created_at):
    return {"outcome": outcome, "created_at": created_at, "client_name": "Client"}


class TestDailyHistory:
    """Grouping calls by day and the daily success ratio"""

    def test_success_ratio_counts_non_resolved(self):
        now = datetime(2026, 3, 4, 10, tzinfo=timezone.utc)
        calls = [
            _call("Resolved", now),
            _call("Escalated", now),
            _call("Follow-up Required", now),
            _call("Resolved", now),
        ]
        assert earnings.success_ratio(calls) == pytest.approx(50.0)

    def test_success_ratio_of_empty_day_is_zero(self):
        assert earnings.success_ratio([]) == 0.0

    def test_groups_newest_day_first_and_numbers_calls(self):
        day_one = datetime(2026, 3, 3, 9, tzinfo=timezone.utc)
        day_two = datetime(2026, 3, 4, 9, tzinfo=timezone.utc)
        calls = [
            _call("Resolved", day_one),
            _call("Escalated", day_two + timedelta(hours=2)),
            _call("Resolved", day_two),
            _call("Resolved", day_one + timedelta(hours=1)),
        ]

        groups = earnings.group_calls_by_day(calls)

        assert [g["date"] for g in groups] == ["2026-03-04", "2026-03-03"]
        latest = groups[0]
        assert latest["total_calls"] == 2
        assert latest["success_ratio"] == pytest.approx(50.0)
        # Newest first, earliest call of the day is #1
        assert [c["daily_number"] for c in latest["calls"]] == [2, 1]
        assert latest["calls"][0]["outcome"] == "Escalated"

    def test_undated_calls_grouped_last(self):
        calls = [
            _call("Resolved", None),
            _call("Resolved", datetime(2026, 3, 4, 9, tzinfo=timezone.utc)),
        ]

        groups = earnings.group_calls_by_day(calls)

        assert [g["date"] for g in groups] == ["2026-03-04", earnings.UNKNOWN_DATE]

    def test_days_are_cut_at_utc_midnight(self):
        # 01:00 in +05:30 is still the previous day in UTC
        ist = timezone(timedelta(hours=5, minutes=30))
        calls = [
            _call("Escalated", datetime(2026, 3, 4, 1, tzinfo=ist)),
            _call("Resolved", datetime(2026, 3, 3, 18, tzinfo=timezone.utc)),
        ]

        groups = earnings.group_calls_by_day(calls)

        assert [g["date"] for g in groups] == ["2026-03-03"]
        assert groups[0]["total_calls"] == 2
        assert [c["daily_number"] for c in groups[0]["calls"]] == [2, 1]
