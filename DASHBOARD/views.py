from django.contrib.auth import get_user_model
from django.db.models import Count, Sum
from django.shortcuts import render
from django.utils import timezone

from LOTES.models import Lot, Zone
from SALES.lifecycle import describe, expires_soon
from SALES.models import Payment, Reservation, SavedLot
from SUPPORT.models import SupportTicket
from USERS.documents import ensure_required_documents
from USERS.models import Document


def status_counts(queryset, choices):
    counts = dict(queryset.order_by().values_list("status").annotate(n=Count("id")))
    return {code: counts.get(code, 0) for code, _ in choices}


def buyer_alerts(reservations, documents, now):
    """Alert banners for the buyer dashboard, most urgent first."""
    alerts = []
    for info in reservations:
        res = info["reservation"]
        if info["is_late"]:
            alerts.append({
                "level": "danger",
                "text": f"Tu pago del lote {res.lot.code} está atrasado (vencía el {res.next_payment_due:%d/%m/%Y}).",
            })
        elif res.next_payment_due and info["balance_due"] > 0:
            alerts.append({
                "level": "info",
                "text": f"Saldo de ${info['balance_due']:,.2f} en el lote {res.lot.code}; próximo pago el {res.next_payment_due:%d/%m/%Y}.",
            })
        if expires_soon(res, now):
            alerts.append({
                "level": "warning",
                "text": f"Tu reserva del lote {res.lot.code} vence en {info['days_remaining']} día(s).",
            })

    missing = sum(1 for d in documents if d.status in (Document.STATUS_REQUIRED, Document.STATUS_REJECTED))
    in_review = sum(1 for d in documents if d.status == Document.STATUS_PENDING)
    if missing:
        alerts.append({"level": "warning", "text": f"Tienes {missing} documento(s) por subir."})
    if in_review:
        alerts.append({"level": "info", "text": f"{in_review} documento(s) en revisión."})
    return alerts


def dashboard(request):
    if request.user.is_authenticated:
        role = getattr(request.user, "role", "CLIENT")

        if role == "ADMIN":
            User = get_user_model()
            context = {
                "users_total": User.objects.count(),
                "clients_total": User.objects.filter(role="CLIENT").count(),
                "lot_counts": status_counts(Lot.objects.all(), Lot.STATUS_CHOICES),
                "lots_total": Lot.objects.count(),
                "zones_total": Zone.objects.count(),
                "reservation_counts": status_counts(Reservation.objects.all(), Reservation.STATUS_CHOICES),
                "total_reserved_amount": (
                    Reservation.objects.filter(status__in=Reservation.OPEN_STATUSES)
                    .aggregate(total=Sum("amount_due"))["total"] or 0
                ),
                "total_paid_amount": (
                    Payment.objects.filter(is_validated=True).aggregate(total=Sum("amount"))["total"] or 0
                ),
                "payments_pending": Payment.objects.filter(is_validated=False).count(),
                "documents_pending": Document.objects.filter(status=Document.STATUS_PENDING).count(),
                "tickets_open": SupportTicket.objects.filter(status__in=SupportTicket.ACTIVE_STATUSES).count(),
            }
            return render(request, "dashboard/admin_dashboard.html", context)

        now = timezone.now()
        reservations = Reservation.objects.filter(client=request.user).select_related("lot")
        open_info = [describe(r, now) for r in reservations if r.is_open]
        documents = list(ensure_required_documents(request.user))

        context = {
            "alerts": buyer_alerts(open_info, documents, now),
            "reservations": open_info,
            "documents_approved": sum(1 for d in documents if d.status == Document.STATUS_APPROVED),
            "documents_total": len(documents),
            "tickets_open": SupportTicket.objects.filter(
                client=request.user, status__in=SupportTicket.ACTIVE_STATUSES
            ).count(),
            "active_total": len(open_info),
            "completed_total": sum(1 for r in reservations if r.status == Reservation.STATUS_COMPLETED),
            "saved_total": SavedLot.objects.filter(client=request.user).count(),
        }
        return render(request, "dashboard/client_dashboard.html", context)

    zones = Zone.objects.annotate(lots_total=Count("lots")).order_by("name")
    return render(request, "dashboard/home.html", {
        "zones": zones,
        "lot_counts": status_counts(Lot.objects.all(), Lot.STATUS_CHOICES),
    })
