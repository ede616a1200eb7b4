import json
import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_http_methods, require_POST

from LOTES.features import format_price
from LOTES.models import Lot
from USERS.views import admin_required, client_required
from .lifecycle import describe
from .models import Payment, Reservation, SavedLot
from .notifications import notify_reservation_created
from .services import (
    InvalidTransitionError,
    LotUnavailableError,
    ReservationError,
    ReservationValidationError,
    change_reservation_status,
    record_payment,
    reserve_lot,
    validate_payment as mark_payment_validated,
    withdraw_reservation,
)
from .wizard import PAYMENT_METHODS, STEPS, ReservationWizard, WizardError

logger = logging.getLogger(__name__)

ADMIN_ACTIONS = {
    "approve": Reservation.STATUS_ACTIVE,
    "complete": Reservation.STATUS_COMPLETED,
    "cancel": Reservation.STATUS_CANCELLED,
}


def _load_wizard(request):
    return ReservationWizard.from_session(request.session.get(ReservationWizard.SESSION_KEY))


def _store_wizard(request, wizard):
    request.session[ReservationWizard.SESSION_KEY] = wizard.to_session()


@login_required
def reserve_view(request):
    wizard = _load_wizard(request)

    if request.method == "GET" and request.GET.get("lot"):
        lot = Lot.objects.filter(code=request.GET["lot"]).select_related("zone").first()
        if lot is None:
            messages.error(request, "El lote indicado no existe.")
        elif not lot.is_available:
            messages.warning(request, f"El lote {lot.code} ya no está disponible. Elige otro.")
            wizard = ReservationWizard.start()
        else:
            wizard = ReservationWizard.start(lot)
        _store_wizard(request, wizard)

    if request.method == "POST":
        data = request.POST
        action = data.get("action")
        try:
            if action == "search":
                wizard.search(data.get("q"))
            elif action == "select":
                lot = get_object_or_404(Lot, code=data.get("lot"))
                wizard.select_lot(lot)
            elif action == "payment":
                wizard.choose_payment(data.get("payment_method"))
            elif action == "confirm":
                wizard.set_confirmed(data.get("confirmed") in ("on", "true", "1"))
            elif action == "reset":
                wizard.reset()
            elif action == "submit":
                return _submit(request, wizard)
            else:
                messages.error(request, "Acción no reconocida.")
        except WizardError as e:
            messages.error(request, str(e))
        _store_wizard(request, wizard)
        return redirect("reserve")

    available = Lot.objects.select_related("zone").filter(status=Lot.STATUS_AVAILABLE).order_by("feature_id")
    selected = None
    quote = None
    if wizard.lot_code:
        selected = Lot.objects.select_related("zone").filter(code=wizard.lot_code).first()
        if selected is not None:
            quote = wizard.quote(selected)

    context = {
        "wizard": wizard,
        "steps": STEPS,
        "lots": wizard.filter_lots(available),
        "selected": selected,
        "selected_price": format_price(selected.price) if selected else "",
        "quote": quote,
        "payment_methods": [(key, label) for key, (label, _) in PAYMENT_METHODS.items()],
    }
    return render(request, "sales/reserve.html", context)


def _submit(request, wizard):
    if not wizard.can_submit:
        messages.error(request, "Completa los tres pasos y confirma tu lote antes de pagar.")
        _store_wizard(request, wizard)
        return redirect("reserve")

    try:
        reservation = reserve_lot(request.user, wizard.lot_code, wizard.payment_method, wizard.confirmed)
    except LotUnavailableError as e:
        messages.error(request, f"El lote {e.lot_code} acaba de ser reservado por alguien más. Elige otro lote.")
        wizard.reset()
        _store_wizard(request, wizard)
        return redirect("reserve")
    except ReservationValidationError as e:
        messages.error(request, str(e))
        _store_wizard(request, wizard)
        return redirect("reserve")
    except DatabaseError:
        logger.exception("Reservation commit failed for lot %s", wizard.lot_code)
        messages.error(request, "No pudimos completar la reserva. Intenta de nuevo en unos momentos.")
        _store_wizard(request, wizard)
        return redirect("reserve")

    request.session.pop(ReservationWizard.SESSION_KEY, None)
    if notify_reservation_created(reservation):
        messages.success(
            request,
            f"Lote {reservation.lot.code} reservado. Te enviamos la confirmación a tu correo. "
            "Si no la encuentras, revisa tu carpeta de SPAM.",
        )
    else:
        messages.success(request, f"Lote {reservation.lot.code} reservado con éxito.")
    return redirect("my_lots")


@login_required
def my_lots(request):
    now = timezone.now()
    reservations = Reservation.objects.filter(client=request.user).select_related("lot", "lot__zone")
    active = [describe(r, now) for r in reservations if r.is_open]
    completed = [describe(r, now) for r in reservations if r.status == Reservation.STATUS_COMPLETED]
    saved = SavedLot.objects.filter(client=request.user).select_related("lot", "lot__zone")
    return render(request, "sales/my_lots.html", {"active": active, "completed": completed, "saved": saved})


@client_required
@require_POST
def withdraw_view(request, reservation_id):
    try:
        reservation = withdraw_reservation(request.user, reservation_id)
    except ReservationError as e:
        messages.error(request, str(e))
    else:
        messages.success(request, f"Te retiraste de la reserva del lote {reservation.lot.code}.")
    return redirect("my_lots")


def _json_body(request):
    try:
        return json.loads(request.body or b"{}")
    except ValueError:
        return None


@require_http_methods(["GET", "POST", "DELETE"])
def saved_lots_api(request):
    if not request.user.is_authenticated:
        return JsonResponse({"error": "Unauthorized"}, status=401)

    if request.method == "GET":
        saved = SavedLot.objects.filter(client=request.user).select_related("lot")
        return JsonResponse({"saved": [s.lot.code for s in saved]})

    body = _json_body(request)
    if body is None or not body.get("lot"):
        return JsonResponse({"error": "lot is required"}, status=400)
    lot = Lot.objects.filter(code=body["lot"]).first()
    if lot is None:
        return JsonResponse({"error": "Lot not found"}, status=404)

    if request.method == "DELETE":
        deleted, _ = SavedLot.objects.filter(client=request.user, lot=lot).delete()
        return JsonResponse({"removed": bool(deleted)})

    _, created = SavedLot.objects.get_or_create(client=request.user, lot=lot)
    if not created:
        return JsonResponse({"message": "Already saved", "lot": lot.code})
    return JsonResponse({"message": "Saved", "lot": lot.code}, status=201)


@admin_required
def admin_reservation_list(request):
    reservations = Reservation.objects.select_related("client", "lot").all()
    status = request.GET.get("status")
    if status:
        reservations = reservations.filter(status=status.upper())
    return render(request, "sales/admin_reservation_list.html", {
        "reservations": reservations,
        "status": status,
        "statuses": Reservation.STATUS_CHOICES,
    })


@admin_required
@require_POST
def admin_reservation_status(request, reservation_id):
    target = ADMIN_ACTIONS.get(request.POST.get("action"))
    if target is None:
        messages.error(request, "Acción no reconocida.")
        return redirect("admin_reservation_list")
    try:
        reservation = change_reservation_status(reservation_id, target, actor=request.user)
    except Reservation.DoesNotExist:
        messages.error(request, "Reserva no encontrada.")
    except InvalidTransitionError as e:
        messages.error(request, str(e))
    else:
        messages.success(request, f"Reserva RES-{reservation.pk}: {reservation.get_status_display()}.")
    return redirect("admin_reservation_list")


@admin_required
def admin_payment_list(request):
    payments = Payment.objects.select_related("reservation", "reservation__client", "reservation__lot").all()
    return render(request, "sales/admin_payment_list.html", {"payments": payments})


@admin_required
def admin_payment_create(request):
    reservations = Reservation.objects.select_related("client", "lot").filter(
        status__in=Reservation.OPEN_STATUSES
    )

    if request.method == "POST":
        data = request.POST
        reservation = get_object_or_404(Reservation, pk=data.get("reservation"))
        try:
            record_payment(
                reservation,
                data.get("amount"),
                method=data.get("method", ""),
                reference=data.get("reference", ""),
                validated=data.get("validated") == "on",
            )
        except ReservationValidationError as e:
            return render(request, "sales/admin_payment_form.html", {
                "reservations": reservations,
                "form": {"reservation": reservation.id, "amount": data.get("amount")},
                "error": str(e),
            })
        messages.success(request, "Pago registrado.")
        return redirect("admin_payment_list")

    return render(request, "sales/admin_payment_form.html", {
        "reservations": reservations,
        "form": {"reservation": "", "amount": ""},
    })


@admin_required
@require_POST
def validate_payment(request, payment_id):
    payment = get_object_or_404(Payment, id=payment_id)
    mark_payment_validated(payment)
    messages.success(request, f"Pago #{payment.pk} validado.")
    return redirect("admin_payment_list")
