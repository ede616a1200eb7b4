"""Tests for the three-step reservation wizard."""
from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest

from LOTES.models import Lot
from SALES.wizard import (
    STEP_CONFIRM,
    STEP_PAYMENT,
    STEP_SELECT,
    ReservationWizard,
    WizardError,
    compute_quote,
)

NOW = datetime(2025, 3, 1, 18, 0, tzinfo=dt_timezone.utc)


def test_starts_on_select():
    wizard = ReservationWizard.start()
    assert wizard.step == STEP_SELECT
    assert wizard.lot_code is None
    assert not wizard.can_submit


def test_preselected_lot_jumps_to_payment(lot):
    wizard = ReservationWizard.start(lot)
    assert wizard.step == STEP_PAYMENT
    assert wizard.lot_code == lot.code


def test_preselected_unavailable_lot_is_ignored(make_lot):
    taken = make_lot(label="A2", status=Lot.STATUS_RESERVED)
    wizard = ReservationWizard.start(taken)
    assert wizard.step == STEP_SELECT
    assert wizard.lot_code is None


def test_selecting_unavailable_lot_raises(make_lot):
    taken = make_lot(label="A2", status=Lot.STATUS_SOLD)
    with pytest.raises(WizardError):
        ReservationWizard().select_lot(taken)


def test_payment_requires_a_lot():
    with pytest.raises(WizardError):
        ReservationWizard().choose_payment("financing")


def test_unknown_payment_method_raises(lot):
    wizard = ReservationWizard.start(lot)
    with pytest.raises(WizardError):
        wizard.choose_payment("bitcoin")
    assert wizard.step == STEP_PAYMENT


def test_steps_never_go_back(make_lot):
    first = make_lot(label="A1")
    second = make_lot(label="A2")
    wizard = ReservationWizard.start(first)
    wizard.choose_payment("outright")
    assert wizard.step == STEP_CONFIRM

    wizard.select_lot(second)
    assert wizard.step == STEP_CONFIRM
    assert wizard.payment_method == "outright"


def test_changing_lot_clears_confirmation(make_lot):
    first = make_lot(label="A1")
    second = make_lot(label="A2")
    wizard = ReservationWizard.start(first)
    wizard.choose_payment("financing")
    wizard.set_confirmed(True)
    assert wizard.can_submit

    wizard.select_lot(first)
    assert wizard.confirmed

    wizard.select_lot(second)
    assert not wizard.confirmed
    assert not wizard.can_submit


def test_reset_returns_to_select(lot):
    wizard = ReservationWizard.start(lot)
    wizard.choose_payment("financing")
    wizard.search("sur")
    wizard.reset()
    assert wizard.to_session() == ReservationWizard().to_session()


def test_session_round_trip(lot):
    wizard = ReservationWizard.start(lot)
    wizard.choose_payment("outright")
    wizard.set_confirmed(True)

    restored = ReservationWizard.from_session(wizard.to_session())
    assert restored.to_session() == wizard.to_session()
    assert restored.can_submit
    assert ReservationWizard.from_session(None).step == STEP_SELECT


def test_search_filters_available_lots(make_lot):
    a1 = make_lot(label="A1")
    a2 = make_lot(label="A2")
    sold = make_lot(label="A3", status=Lot.STATUS_SOLD)
    wizard = ReservationWizard()

    assert wizard.filter_lots([a1, a2, sold]) == [a1, a2]
    wizard.search("  a2 ")
    assert wizard.filter_lots([a1, a2, sold]) == [a2]
    wizard.search("bajada")
    assert wizard.filter_lots([a1, a2, sold]) == [a1, a2]


def test_quote_arithmetic(settings):
    settings.TIME_ZONE = "UTC"
    quote = compute_quote(Decimal("78000"), "financing", NOW)

    assert quote.total_price == Decimal("78000")
    assert quote.reservation_fee == Decimal("5000")
    assert quote.balance_due == Decimal("73000")
    assert quote.payment_plan == "monthly"
    assert quote.next_payment_due == date(2025, 3, 16)
    assert quote.expiry_date == NOW + timedelta(days=30)


def test_outright_plan_is_one_time():
    assert compute_quote(Decimal("68000"), "outright", NOW).payment_plan == "one-time"
    assert compute_quote(Decimal("68000"), None, NOW).payment_plan == ""
