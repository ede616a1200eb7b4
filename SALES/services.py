"""
Reservation writes.

Every function here runs in one ``transaction.atomic()`` block. Claiming a
lot is a conditional update from AVAILABLE to RESERVED, so of two buyers
racing for the same lot exactly one wins; the other gets
``LotUnavailableError`` and the lot is left as the winner set it.
"""
import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Sum
from django.utils import timezone

from LOTES.models import Lot
from .lifecycle import is_past_expiry
from .models import Payment, Reservation
from .wizard import PAYMENT_METHODS, compute_quote

logger = logging.getLogger(__name__)

TRANSITIONS = {
    Reservation.STATUS_PENDING: {Reservation.STATUS_ACTIVE, Reservation.STATUS_CANCELLED, Reservation.STATUS_EXPIRED},
    Reservation.STATUS_ACTIVE: {Reservation.STATUS_COMPLETED, Reservation.STATUS_CANCELLED, Reservation.STATUS_EXPIRED},
}

LOT_STATUS_AFTER = {
    Reservation.STATUS_COMPLETED: Lot.STATUS_SOLD,
    Reservation.STATUS_CANCELLED: Lot.STATUS_AVAILABLE,
    Reservation.STATUS_EXPIRED: Lot.STATUS_AVAILABLE,
}


class ReservationError(Exception):
    pass


class ReservationValidationError(ReservationError):
    pass


class LotUnavailableError(ReservationError):
    def __init__(self, lot_code):
        super().__init__(f"Lot {lot_code} is no longer available")
        self.lot_code = lot_code


class InvalidTransitionError(ReservationError):
    pass


def initial_status():
    if settings.RESERVATION_REQUIRES_APPROVAL:
        return Reservation.STATUS_PENDING
    return Reservation.STATUS_ACTIVE


def reserve_lot(client, lot_code, payment_method, confirmed, now=None):
    if not lot_code:
        raise ReservationValidationError("Selecciona un lote.")
    if payment_method not in PAYMENT_METHODS:
        raise ReservationValidationError("Selecciona un método de pago.")
    if not confirmed:
        raise ReservationValidationError("Confirma que este es tu lote.")

    now = now or timezone.now()
    with transaction.atomic():
        claimed = Lot.objects.filter(code=lot_code, status=Lot.STATUS_AVAILABLE).update(
            status=Lot.STATUS_RESERVED, updated_at=now
        )
        if not claimed:
            if not Lot.objects.filter(code=lot_code).exists():
                raise ReservationValidationError(f"El lote {lot_code} no existe.")
            logger.info("Reservation conflict on lot %s for client %s", lot_code, client.pk)
            raise LotUnavailableError(lot_code)

        lot = Lot.objects.get(code=lot_code)
        quote = compute_quote(lot.price, payment_method, now)
        try:
            with transaction.atomic():
                reservation = Reservation.objects.create(
                    client=client,
                    lot=lot,
                    status=initial_status(),
                    amount_due=lot.price,
                    amount_paid=quote.reservation_fee,
                    reservation_fee=quote.reservation_fee,
                    payment_plan=quote.payment_plan,
                    next_payment_due=quote.next_payment_due,
                    expiry_date=quote.expiry_date,
                )
        except IntegrityError:
            logger.warning("Open reservation already exists for lot %s", lot_code)
            raise LotUnavailableError(lot_code)

    logger.info(
        "Reservation %s created: lot=%s client=%s status=%s plan=%s",
        reservation.pk, lot.code, client.pk, reservation.status, reservation.payment_plan,
    )
    return reservation


def change_reservation_status(reservation_id, new_status, actor=None):
    with transaction.atomic():
        reservation = Reservation.objects.select_for_update().select_related("lot").get(pk=reservation_id)
        allowed = TRANSITIONS.get(reservation.status, set())
        if new_status not in allowed:
            raise InvalidTransitionError(
                f"No se puede pasar de {reservation.get_status_display()} a {dict(Reservation.STATUS_CHOICES).get(new_status, new_status)}."
            )
        old_status = reservation.status
        reservation.status = new_status
        reservation.save(update_fields=["status", "updated_at"])

        lot_status = LOT_STATUS_AFTER.get(new_status)
        if lot_status:
            Lot.objects.filter(pk=reservation.lot_id).update(status=lot_status, updated_at=timezone.now())

    logger.info(
        "Reservation %s %s -> %s by %s", reservation.pk, old_status, new_status, getattr(actor, "pk", "system")
    )
    if new_status == Reservation.STATUS_ACTIVE and reservation.amount_paid >= reservation.amount_due:
        # Se pagó completo mientras esperaba aprobación
        return change_reservation_status(reservation.pk, Reservation.STATUS_COMPLETED, actor=actor)
    return reservation


def withdraw_reservation(client, reservation_id, now=None):
    reservation = Reservation.objects.filter(pk=reservation_id, client=client).first()
    if reservation is None:
        raise ReservationValidationError("Reserva no encontrada.")
    if not reservation.is_open:
        raise InvalidTransitionError("Esta reserva ya no está abierta.")
    if is_past_expiry(reservation, now):
        raise InvalidTransitionError("El plazo para retirarte ya venció.")
    return change_reservation_status(reservation.pk, Reservation.STATUS_CANCELLED, actor=client)


def expire_overdue_reservations(now=None):
    now = now or timezone.now()
    overdue = Reservation.objects.filter(
        status__in=Reservation.OPEN_STATUSES, expiry_date__isnull=False, expiry_date__lte=now
    ).values_list("pk", flat=True)
    expired = []
    for pk in list(overdue):
        try:
            expired.append(change_reservation_status(pk, Reservation.STATUS_EXPIRED))
        except InvalidTransitionError:
            # Cambió de estado entre la consulta y el bloqueo
            continue
    return expired


def sync_amount_paid(reservation):
    """Recompute ``amount_paid`` from the fee plus validated payments."""
    with transaction.atomic():
        reservation = Reservation.objects.select_for_update().get(pk=reservation.pk)
        validated = (
            reservation.payments.filter(is_validated=True).aggregate(total=Sum("amount"))["total"]
            or Decimal("0")
        )
        reservation.amount_paid = reservation.reservation_fee + validated
        reservation.save(update_fields=["amount_paid", "updated_at"])

    if reservation.status == Reservation.STATUS_ACTIVE and reservation.amount_paid >= reservation.amount_due:
        reservation = change_reservation_status(reservation.pk, Reservation.STATUS_COMPLETED)
    return reservation


def parse_amount(raw):
    try:
        amount = Decimal(str(raw))
    except (InvalidOperation, TypeError):
        raise ReservationValidationError("Monto inválido.")
    if amount <= Decimal("0"):
        raise ReservationValidationError("El monto debe ser mayor a 0.")
    return amount


def record_payment(reservation, raw_amount, method="", reference="", validated=False):
    """Register a payment; validated or not, the total never exceeds the price."""
    amount = parse_amount(raw_amount)
    with transaction.atomic():
        reservation = Reservation.objects.select_for_update().get(pk=reservation.pk)
        if not reservation.is_open:
            raise ReservationValidationError("La reserva no admite pagos.")
        unvalidated = (
            reservation.payments.filter(is_validated=False).aggregate(total=Sum("amount"))["total"]
            or Decimal("0")
        )
        pending = reservation.balance() - unvalidated
        if amount > pending:
            raise ReservationValidationError(f"El monto excede el saldo pendiente (${pending}).")
        payment = Payment.objects.create(
            reservation=reservation, amount=amount, method=method, reference=reference, is_validated=validated
        )
    logger.info("Payment %s of %s recorded for reservation %s", payment.pk, amount, reservation.pk)
    return payment


def validate_payment(payment):
    payment.is_validated = True
    payment.save(update_fields=["is_validated"])
    return payment
