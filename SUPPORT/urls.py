from django.urls import path
from .views import (
    TicketCreateView,
    my_tickets,
    ticket_detail,
    admin_ticket_list,
    admin_ticket_detail,
)

urlpatterns = [
    path('nuevo/', TicketCreateView.as_view(), name='ticket_create'),
    path('mis-solicitudes/', my_tickets, name='my_tickets'),
    path('<int:ticket_id>/', ticket_detail, name='ticket_detail'),
    path('admin/list/', admin_ticket_list, name='admin_ticket_list'),
    path('admin/<int:ticket_id>/', admin_ticket_detail, name='admin_ticket_detail'),
]
