"""
Three-step reservation wizard: Select -> Choose Payment -> Confirm & Pay.

The wizard only holds choices. The step never goes back except through
``reset``. Committing is done by ``SALES.services.reserve_lot``.
"""
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.utils import timezone

STEP_SELECT = 1
STEP_PAYMENT = 2
STEP_CONFIRM = 3
STEPS = (
    (STEP_SELECT, "Select"),
    (STEP_PAYMENT, "Choose Payment"),
    (STEP_CONFIRM, "Confirm & Pay"),
)

PAYMENT_FINANCING = "financing"
PAYMENT_OUTRIGHT = "outright"
PAYMENT_METHODS = {
    PAYMENT_FINANCING: ("BAJA Special Financing", "monthly"),
    PAYMENT_OUTRIGHT: ("Purchase Outright (Cash/Wire)", "one-time"),
}


class WizardError(ValueError):
    pass


@dataclass
class ReservationQuote:
    total_price: Decimal
    reservation_fee: Decimal
    balance_due: Decimal
    next_payment_due: object
    expiry_date: object
    payment_plan: str = ""


def payment_plan_for(method):
    return PAYMENT_METHODS[method][1] if method in PAYMENT_METHODS else ""


def compute_quote(price, payment_method=None, now=None):
    now = now or timezone.now()
    fee = Decimal(settings.RESERVATION_FEE)
    price = Decimal(price)
    return ReservationQuote(
        total_price=price,
        reservation_fee=fee,
        balance_due=price - fee,
        next_payment_due=timezone.localdate(now + timedelta(days=settings.NEXT_PAYMENT_OFFSET_DAYS)),
        expiry_date=now + timedelta(days=settings.RESERVATION_EXPIRY_DAYS),
        payment_plan=payment_plan_for(payment_method),
    )


def matches(lot, query):
    if not query:
        return True
    q = query.lower()
    return q in lot.code.lower() or q in lot.label.lower() or q in lot.zone.name.lower()


class ReservationWizard:
    SESSION_KEY = "reservation_wizard"

    def __init__(self, step=STEP_SELECT, lot_code=None, payment_method="", confirmed=False, query=""):
        self.step = step
        self.lot_code = lot_code
        self.payment_method = payment_method
        self.confirmed = confirmed
        self.query = query

    @classmethod
    def start(cls, preselected=None):
        wizard = cls()
        if preselected is not None and preselected.is_available:
            wizard.select_lot(preselected)
        return wizard

    def _advance(self, step):
        self.step = max(self.step, step)

    def filter_lots(self, lots):
        return [lot for lot in lots if lot.is_available and matches(lot, self.query)]

    def search(self, query):
        self.query = (query or "").strip()

    def select_lot(self, lot):
        if not lot.is_available:
            raise WizardError(f"Lot {lot.code} is not available")
        if lot.code != self.lot_code:
            self.confirmed = False
        self.lot_code = lot.code
        self._advance(STEP_PAYMENT)

    def choose_payment(self, method):
        if self.lot_code is None:
            raise WizardError("Select a lot first")
        if method not in PAYMENT_METHODS:
            raise WizardError(f"Unknown payment method {method!r}")
        self.payment_method = method
        self._advance(STEP_CONFIRM)

    def set_confirmed(self, confirmed):
        self.confirmed = bool(confirmed)

    def reset(self):
        self.step = STEP_SELECT
        self.lot_code = None
        self.payment_method = ""
        self.confirmed = False
        self.query = ""

    @property
    def can_submit(self):
        return (
            self.step == STEP_CONFIRM
            and self.lot_code is not None
            and self.payment_method in PAYMENT_METHODS
            and self.confirmed
        )

    def quote(self, lot, now=None):
        return compute_quote(lot.price, self.payment_method, now)

    def to_session(self):
        return {
            "step": self.step,
            "lot_code": self.lot_code,
            "payment_method": self.payment_method,
            "confirmed": self.confirmed,
            "query": self.query,
        }

    @classmethod
    def from_session(cls, data):
        return cls(**data) if data else cls()
