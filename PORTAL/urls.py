"""
URL configuration for the Santo Tomás Nuevo portal.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.0/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from LOTES.views import lot_geojson_api, lot_list_api
from SALES.views import saved_lots_api


urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('DASHBOARD.urls')),
    path('lotes/', include('LOTES.urls')),
    path('ventas/', include('SALES.urls')),
    path('soporte/', include('SUPPORT.urls')),
    path('cuenta/', include('USERS.urls')),
    path('api/lotes/', lot_list_api, name='lot_list_api'),
    path('api/lotes/geojson/', lot_geojson_api, name='lot_geojson_api'),
    path('api/lotes/guardados/', saved_lots_api, name='saved_lots_api'),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
