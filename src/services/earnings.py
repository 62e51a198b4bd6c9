"""
Earnings and company-funds arithmetic.

Pure functions over plain values and row mappings so the rules can be
reused by every service without touching the database.
"""

import logging
from collections import OrderedDict
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping

from models.enums import CallOutcome, PaymentStatus
from utils.exceptions import InsufficientFundsError

logger = logging.getLogger(__name__)

NON_RESOLVED_OUTCOMES = (CallOutcome.ESCALATED.value, CallOutcome.FOLLOW_UP_REQUIRED.value)
UNKNOWN_DATE = "Unknown Date"


def total_earnings(call_count: int, rate: Decimal) -> Decimal:
    """Earnings from logged calls: one fixed rate per call"""
    if call_count < 0:
        raise ValueError(f"call_count cannot be negative: {call_count}")
    return Decimal(call_count) * Decimal(rate)


def total_paid(payments: Iterable[Mapping[str, Any]]) -> Decimal:
    """Sum of payment amounts, ignoring cancelled payments"""
    paid = Decimal("0")
    for payment in payments:
        if _status_value(payment.get("status")) == PaymentStatus.CANCELLED.value:
            continue
        paid += Decimal(payment.get("amount") or 0)
    return paid


def pending_balance(call_count: int, paid: Decimal, rate: Decimal) -> Decimal:
    """
    Amount still owed to an agent.

    Negative when the agent has received advances beyond their call earnings.
    """
    return total_earnings(call_count, rate) - Decimal(paid)


def ensure_funds_floor(balance: Decimal, amount: Decimal, floor: Decimal) -> Decimal:
    """
    Check that crediting ``amount`` keeps company funds at or above ``floor``.

    Returns:
        The balance after the credit

    Raises:
        InsufficientFundsError: when the remaining balance would drop below the floor
    """
    remaining = Decimal(balance) - Decimal(amount)
    if remaining < Decimal(floor):
        raise InsufficientFundsError(
            f"Insufficient company funds: balance {balance}, payment {amount}, floor {floor}",
            balance=Decimal(balance),
            amount=Decimal(amount),
            floor=Decimal(floor),
        )
    return remaining


def success_ratio(entries: List[Mapping[str, Any]]) -> float:
    # Share of calls needing further work: (Escalated + Follow-up Required) / total
    if not entries:
        return 0.0
    non_resolved = sum(1 for entry in entries if _status_value(entry.get("outcome")) in NON_RESOLVED_OUTCOMES)
    return non_resolved / len(entries) * 100


def group_calls_by_day(entries: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Group call entries by calendar day, newest day first.

    Days are UTC calendar days, matching the numbering used when a call is
    logged. Within a day calls are ordered newest first and numbered so the
    earliest call of the day is #1.
    """
    groups: "OrderedDict[str, List[Mapping[str, Any]]]" = OrderedDict()
    for entry in entries:
        created_at = entry.get("created_at")
        day = _utc_day(created_at) if created_at is not None else UNKNOWN_DATE
        groups.setdefault(day, []).append(entry)

    daily_groups = []
    for day, calls in groups.items():
        calls = sorted(calls, key=lambda c: c["created_at"], reverse=True) if day != UNKNOWN_DATE else list(calls)
        total = len(calls)
        daily_groups.append({
            "date": day,
            "total_calls": total,
            "success_ratio": success_ratio(calls),
            "calls": [
                {**dict(call), "daily_number": total - index}
                for index, call in enumerate(calls)
            ],
        })

    # ISO dates sort lexically; undated entries go last
    daily_groups.sort(key=lambda g: (g["date"] != UNKNOWN_DATE, g["date"]), reverse=True)
    return daily_groups


def _utc_day(created_at: datetime) -> str:
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc)
    return created_at.strftime("%Y-%m-%d")


def _status_value(value: Any) -> Any:
    return value.value if hasattr(value, "value") else value
