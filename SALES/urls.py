from django.urls import path
from .views import (
    my_lots,
    reserve_view,
    withdraw_view,
    admin_reservation_list,
    admin_reservation_status,
    admin_payment_list,
    admin_payment_create,
    validate_payment,
)

urlpatterns = [
    path('reservar/', reserve_view, name='reserve'),
    path('mis-lotes/', my_lots, name='my_lots'),
    path('retirar/<int:reservation_id>/', withdraw_view, name='withdraw_reservation'),

    # Admin Ventas
    path('admin/reservations/', admin_reservation_list, name='admin_reservation_list'),
    path('admin/reservations/<int:reservation_id>/status/', admin_reservation_status, name='admin_reservation_status'),
    path('admin/payments/', admin_payment_list, name='admin_payment_list'),
    path('admin/payment/create/', admin_payment_create, name='admin_payment_create'),
    path('admin/payment/validate/<int:payment_id>/', validate_payment, name='validate_payment'),
]
