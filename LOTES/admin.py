from django.contrib import admin
from .models import Zone, Lot


@admin.register(Zone)
class ZoneAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "zoning_type", "base_price", "lot_size_sqm")
    search_fields = ("name", "slug")
    readonly_fields = ("corners",)


@admin.register(Lot)
class LotAdmin(admin.ModelAdmin):
    list_display = ("code", "zone", "label", "size_sqm", "price", "status", "feature_id")
    list_filter = ("zone", "status")
    search_fields = ("code", "label")
    readonly_fields = ("polygon", "center", "feature_id")
