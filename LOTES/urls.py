from django.urls import path
from .views import (
    lot_list,
    map_view,
    map_event,
    map_close,
    lot_detail,
    admin_lot_list,
    admin_lot_edit,
    admin_zone_list,
    admin_zone_edit,
)

urlpatterns = [
    path('', lot_list, name='lot_list'),
    path('mapa/', map_view, name='lot_map'),
    path('mapa/evento/', map_event, name='map_event'),
    path('mapa/cerrar/', map_close, name='map_close'),
    path('<slug:code>/', lot_detail, name='lot_detail'),

    # Admin Lotes
    path('admin/list/', admin_lot_list, name='admin_lot_list'),
    path('admin/edit/<int:lot_id>/', admin_lot_edit, name='admin_lot_edit'),

    # Admin Zonas
    path('admin/zones/', admin_zone_list, name='admin_zone_list'),
    path('admin/zones/edit/<int:zone_id>/', admin_zone_edit, name='admin_zone_edit'),
]
