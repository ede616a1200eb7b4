"""Tests for the role-dependent home page."""
from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from django.urls import reverse

from DASHBOARD.views import buyer_alerts, status_counts
from LOTES.models import Lot
from SALES.lifecycle import describe
from SALES.models import Reservation
from SALES.services import reserve_lot
from USERS.models import Document

NOW = datetime(2025, 6, 10, 19, 0, tzinfo=dt_timezone.utc)


def test_status_counts_fills_missing(make_lot):
    make_lot(label="A1")
    make_lot(label="A2", status=Lot.STATUS_SOLD)
    make_lot(label="A3", status=Lot.STATUS_SOLD)

    assert status_counts(Lot.objects.all(), Lot.STATUS_CHOICES) == {
        "AVAILABLE": 1, "RESERVED": 0, "SOLD": 2,
    }


def test_alerts_for_late_payment_and_documents(lot):
    late = Reservation(
        lot=lot,
        status=Reservation.STATUS_ACTIVE,
        amount_due=Decimal("68000"),
        amount_paid=Decimal("5000"),
        next_payment_due=date(2025, 6, 1),
        expiry_date=NOW + timedelta(days=3),
    )
    documents = [
        Document(doc_type="tax_id", status=Document.STATUS_REQUIRED),
        Document(doc_type="government_id", status=Document.STATUS_PENDING),
    ]

    alerts = buyer_alerts([describe(late, NOW)], documents, NOW)

    assert [a["level"] for a in alerts] == ["danger", "warning", "warning", "info"]
    assert "01/06/2025" in alerts[0]["text"]
    assert "3 día(s)" in alerts[1]["text"]


def test_alert_for_upcoming_payment(lot):
    upcoming = Reservation(
        lot=lot,
        status=Reservation.STATUS_ACTIVE,
        amount_due=Decimal("68000"),
        amount_paid=Decimal("5000"),
        next_payment_due=date(2025, 6, 25),
        expiry_date=NOW + timedelta(days=30),
    )
    [alert] = buyer_alerts([describe(upcoming, NOW)], [], NOW)
    assert alert["level"] == "info"
    assert "$63,000.00" in alert["text"]


def test_anonymous_home(client, seeded_lots):
    response = client.get(reverse("dashboard"))
    assert response.status_code == 200
    assert sum(response.context["lot_counts"].values()) == 20


def test_buyer_dashboard(buyer_client, buyer, lot):
    reserve_lot(buyer, lot.code, "financing", True)
    response = buyer_client.get(reverse("dashboard"))

    assert response.status_code == 200
    assert response.context["active_total"] == 1
    assert response.context["documents_total"] == 6
    assert any("documento(s) por subir" in a["text"] for a in response.context["alerts"])


def test_admin_dashboard(staff_client, buyer, lot):
    reserve_lot(buyer, lot.code, "outright", True)
    response = staff_client.get(reverse("dashboard"))

    assert response.context["lot_counts"]["RESERVED"] == 1
    assert response.context["reservation_counts"]["ACTIVE"] == 1
    assert response.context["total_reserved_amount"] == Decimal("68000")
