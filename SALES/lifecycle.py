"""
Read-time figures derived from a reservation.

Nothing here writes to the database. Everything that depends on the clock
takes ``now`` so callers recompute on every read.
"""
import math
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

EXPIRY_WARNING_DAYS = 7
ONE_DAY = timedelta(days=1)


def _now(now):
    return now or timezone.now()


def progress_ratio(reservation):
    if reservation.amount_due and reservation.amount_due > 0:
        return Decimal(reservation.amount_paid) / Decimal(reservation.amount_due)
    return Decimal("0")


def progress_percent(reservation):
    """Progress for display, clamped to 0..100."""
    percent = progress_ratio(reservation) * 100
    return max(Decimal("0"), min(Decimal("100"), percent))


def balance_due(reservation):
    return reservation.amount_due - reservation.amount_paid


def is_late(reservation, now=None):
    if reservation.next_payment_due is None:
        return False
    if reservation.status == reservation.STATUS_COMPLETED:
        return False
    today = timezone.localdate(_now(now))
    return reservation.next_payment_due < today


def days_remaining(reservation, now=None):
    if reservation.expiry_date is None:
        return None
    remaining = (reservation.expiry_date - _now(now)) / ONE_DAY
    return max(0, math.ceil(remaining))


def expires_soon(reservation, now=None, within=EXPIRY_WARNING_DAYS):
    days = days_remaining(reservation, now)
    return days is not None and 0 < days <= within


def is_past_expiry(reservation, now=None):
    return reservation.expiry_date is not None and reservation.expiry_date <= _now(now)


def describe(reservation, now=None):
    """Everything the reservation cards need, in one dict."""
    now = _now(now)
    late = is_late(reservation, now)
    return {
        "reservation": reservation,
        "progress": progress_percent(reservation),
        "balance_due": balance_due(reservation),
        "is_late": late,
        "days_remaining": days_remaining(reservation, now),
        "can_withdraw_until": reservation.expiry_date if reservation.is_open and not late else None,
    }
