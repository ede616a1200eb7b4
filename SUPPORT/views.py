import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import transaction
from django.shortcuts import get_object_or_404, redirect, render
from django.template.loader import render_to_string
from django.urls import reverse_lazy
from django.views.generic.edit import CreateView

from LOTES.models import Lot
from PORTAL.mail import mailjet_configured, send_mailjet_email
from SALES.models import Reservation
from USERS.views import admin_required
from .models import SupportTicket, TicketMessage

logger = logging.getLogger(__name__)


def notify_ticket(ticket, subject, template, extra=None):
    client = ticket.client
    if not client.email or not mailjet_configured():
        return False
    context = {'user_name': client.get_full_name() or client.username, 'ticket': ticket}
    context.update(extra or {})
    try:
        send_mailjet_email(
            subject=subject,
            html_content=render_to_string(template, context),
            to_email=client.email,
            to_name=client.get_full_name() or client.username,
        )
    except Exception:
        logger.exception("Mailjet send failed for ticket %s", ticket.pk)
        return False
    return True


class TicketCreateView(LoginRequiredMixin, CreateView):
    model = SupportTicket
    fields = ['category', 'priority', 'subject', 'description', 'lot', 'reservation', 'preferred_contact', 'best_time']
    template_name = 'support/ticket_form.html'
    success_url = reverse_lazy('my_tickets')

    def get_initial(self):
        initial = super().get_initial()
        code = self.request.GET.get('lot')
        lot = Lot.objects.filter(code=code).first() if code else None
        if lot is not None:
            # Viene del botón "Request More Information" del modal
            initial.update({
                'lot': lot,
                'category': 'LOT_INFO',
                'subject': f"Información sobre el lote {lot.code}",
            })
        return initial

    def get_form(self, form_class=None):
        form = super().get_form(form_class)
        form.fields['lot'].required = False
        form.fields['reservation'].required = False
        form.fields['reservation'].queryset = Reservation.objects.filter(client=self.request.user)
        return form

    def form_valid(self, form):
        form.instance.client = self.request.user
        with transaction.atomic():
            response = super().form_valid(form)
            if form.instance.description:
                TicketMessage.objects.create(
                    ticket=self.object, sender=self.request.user, message=form.instance.description
                )
        logger.info("Ticket %s opened by user %s", self.object.pk, self.request.user.pk)

        if notify_ticket(self.object, f"Hemos recibido tu solicitud #{self.object.pk}", 'emails/ticket_created_email.html'):
            messages.success(
                self.request,
                "Solicitud registrada. Te hemos enviado un correo de confirmación. "
                "Si no lo encuentras, revisa tu carpeta de SPAM."
            )
        else:
            messages.success(self.request, "Solicitud registrada correctamente.")
        return response


@login_required
def my_tickets(request):
    items = SupportTicket.objects.filter(client=request.user).select_related('lot')
    return render(request, 'support/my_tickets.html', {'items': items})


@login_required
def ticket_detail(request, ticket_id):
    ticket = get_object_or_404(SupportTicket, pk=ticket_id, client=request.user)

    if request.method == "POST":
        text = (request.POST.get("message") or "").strip()
        if ticket.status == SupportTicket.STATUS_CLOSED:
            messages.error(request, "Este ticket está cerrado.")
        elif not text:
            messages.error(request, "Escribe un mensaje.")
        else:
            TicketMessage.objects.create(ticket=ticket, sender=request.user, message=text)
            ticket.status = SupportTicket.STATUS_WAITING_ON_SUPPORT
            ticket.save(update_fields=["status", "updated_at"])
        return redirect("ticket_detail", ticket_id=ticket.pk)

    return render(request, 'support/ticket_detail.html', {
        'ticket': ticket,
        'thread': ticket.messages.select_related('sender'),
    })


@admin_required
def admin_ticket_list(request):
    items = SupportTicket.objects.select_related("client", "lot").all()
    status = request.GET.get("status")
    if status:
        items = items.filter(status=status.upper())
    return render(request, "support/admin_ticket_list.html", {
        "items": items,
        "status": status,
        "statuses": SupportTicket.STATUS_CHOICES,
    })


@admin_required
def admin_ticket_detail(request, ticket_id):
    ticket = get_object_or_404(SupportTicket.objects.select_related("client", "lot"), pk=ticket_id)

    if request.method == "POST":
        data = request.POST
        text = (data.get("message") or "").strip()
        status = data.get("status")
        if status and status not in dict(SupportTicket.STATUS_CHOICES):
            messages.error(request, "Estado inválido.")
            return redirect("admin_ticket_detail", ticket_id=ticket.pk)

        if text:
            TicketMessage.objects.create(ticket=ticket, sender=request.user, message=text, is_admin=True)
            ticket.status = SupportTicket.STATUS_WAITING_ON_USER
        if status and (not text or status in (SupportTicket.STATUS_RESOLVED, SupportTicket.STATUS_CLOSED)):
            ticket.status = status
        ticket.save(update_fields=["status", "updated_at"])

        if text:
            notify_ticket(
                ticket,
                f"Respuesta a tu solicitud #{ticket.pk}",
                'emails/ticket_updated_email.html',
                {'response': text, 'status': ticket.get_status_display()},
            )
        messages.success(request, "Cambios guardados correctamente.")
        return redirect("admin_ticket_detail", ticket_id=ticket.pk)

    return render(request, "support/admin_ticket_detail.html", {
        "ticket": ticket,
        "thread": ticket.messages.select_related("sender"),
        "statuses": SupportTicket.STATUS_CHOICES,
    })
