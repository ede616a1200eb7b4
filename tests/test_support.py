"""Tests for support tickets and their conversation status."""
from django.urls import reverse

from SUPPORT.models import SupportTicket, TicketMessage


def open_ticket(client_user, **kwargs):
    values = {"client": client_user, "subject": "Duda sobre pagos", "description": "¿Aceptan transferencia?"}
    values.update(kwargs)
    return SupportTicket.objects.create(**values)


def test_request_info_prefills_lot(buyer_client, lot):
    response = buyer_client.get(reverse("ticket_create"), {"lot": lot.code})

    initial = response.context["form"].initial
    assert initial["lot"] == lot
    assert initial["category"] == "LOT_INFO"
    assert lot.code in initial["subject"]


def test_create_ticket_writes_first_message(buyer_client, buyer, lot):
    response = buyer_client.post(reverse("ticket_create"), {
        "category": "LOT_INFO",
        "priority": "NORMAL",
        "subject": "Información sobre el lote",
        "description": "¿Tiene acceso a agua?",
        "lot": lot.pk,
        "preferred_contact": "whatsapp",
        "best_time": "afternoon",
    })

    assert response.status_code == 302
    ticket = SupportTicket.objects.get()
    assert ticket.client == buyer
    assert ticket.status == SupportTicket.STATUS_OPEN
    assert [m.message for m in ticket.messages.all()] == ["¿Tiene acceso a agua?"]


def test_buyer_reply_waits_on_support(buyer_client, buyer):
    ticket = open_ticket(buyer, status=SupportTicket.STATUS_WAITING_ON_USER)
    buyer_client.post(reverse("ticket_detail", args=[ticket.pk]), {"message": "Aquí está el comprobante"})

    ticket.refresh_from_db()
    assert ticket.status == SupportTicket.STATUS_WAITING_ON_SUPPORT
    assert ticket.messages.get().is_admin is False


def test_closed_ticket_rejects_replies(buyer_client, buyer):
    ticket = open_ticket(buyer, status=SupportTicket.STATUS_CLOSED)
    buyer_client.post(reverse("ticket_detail", args=[ticket.pk]), {"message": "Hola"})
    assert not TicketMessage.objects.exists()


def test_buyer_cannot_see_other_tickets(buyer_client, other_buyer):
    ticket = open_ticket(other_buyer)
    assert buyer_client.get(reverse("ticket_detail", args=[ticket.pk])).status_code == 404


def test_admin_reply_waits_on_user(staff_client, buyer):
    ticket = open_ticket(buyer)
    staff_client.post(reverse("admin_ticket_detail", args=[ticket.pk]), {"message": "Sí, por SPEI."})

    ticket.refresh_from_db()
    assert ticket.status == SupportTicket.STATUS_WAITING_ON_USER
    assert ticket.messages.get().is_admin


def test_admin_can_resolve_with_reply(staff_client, buyer):
    ticket = open_ticket(buyer)
    staff_client.post(
        reverse("admin_ticket_detail", args=[ticket.pk]),
        {"message": "Listo.", "status": SupportTicket.STATUS_RESOLVED},
    )
    ticket.refresh_from_db()
    assert ticket.status == SupportTicket.STATUS_RESOLVED


def test_admin_rejects_unknown_status(staff_client, buyer):
    ticket = open_ticket(buyer)
    staff_client.post(reverse("admin_ticket_detail", args=[ticket.pk]), {"status": "ARCHIVED"})
    ticket.refresh_from_db()
    assert ticket.status == SupportTicket.STATUS_OPEN
