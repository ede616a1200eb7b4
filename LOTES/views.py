import json
import logging
from dataclasses import asdict
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from USERS.views import admin_required
from .features import FeatureIndex, format_price, format_size
from .map_controller import CommandSurface, MapInteractionController
from .map_style import (
    MAP_CENTER,
    MAP_STYLE,
    MAP_ZOOM,
    ORTHO_BOUNDS,
    STATUS_COLORS,
    sublot_fill_paint,
    sublot_outline_paint,
)
from .modal import LotDetail
from .models import Lot, Zone

logger = logging.getLogger(__name__)

MAP_SESSION_KEY = "map_surface"


def current_index():
    lots = Lot.objects.select_related("zone").all().order_by("feature_id")
    zones = Zone.objects.all().order_by("name")
    return FeatureIndex(lots, zones)


def lot_list(request):
    lots = Lot.objects.select_related("zone").all().order_by("feature_id")
    status = request.GET.get("status")
    if status:
        lots = lots.filter(status=status.upper())
    zones = Zone.objects.all().order_by("name")
    return render(request, "lotes/list.html", {"lots": lots, "zones": zones, "status": status})


def map_view(request):
    index = current_index()
    controller = MapInteractionController(
        CommandSurface(), index, is_authenticated=request.user.is_authenticated
    )
    request.session[MAP_SESSION_KEY] = controller.snapshot()

    zones = Zone.objects.all().order_by("name")
    context = {
        "zones": zones,
        "map_config": {
            "token": settings.MAPBOX_TOKEN,
            "tileset": settings.MAPBOX_TILESET,
            "style": MAP_STYLE,
            "center": MAP_CENTER,
            "zoom": MAP_ZOOM,
            "orthoBounds": ORTHO_BOUNDS,
            "statusColors": STATUS_COLORS,
            "fillPaint": sublot_fill_paint(),
            "outlinePaint": sublot_outline_paint(),
        },
        "lot_counts": {
            code.lower(): Lot.objects.filter(status=code).count() for code, _ in Lot.STATUS_CHOICES
        },
    }
    return render(request, "lotes/map.html", context)


@require_POST
def map_event(request):
    snapshot = request.session.get(MAP_SESSION_KEY)
    if snapshot is None:
        return JsonResponse({"mounted": False, "commands": []}, status=409)

    try:
        event = json.loads(request.body or b"{}")
    except ValueError:
        return JsonResponse({"error": "Invalid JSON"}, status=400)
    if not isinstance(event, dict):
        return JsonResponse({"error": "Event must be a JSON object"}, status=400)

    controller = MapInteractionController.restore(
        snapshot, current_index(), is_authenticated=request.user.is_authenticated
    )
    if not controller.accept(event.get("seq")):
        return JsonResponse({"stale": True, "seq": controller.last_seq, "commands": []})

    try:
        controller.handle(event)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)

    request.session[MAP_SESSION_KEY] = controller.snapshot()
    selected = controller.selected_lot
    return JsonResponse(
        {
            "seq": controller.last_seq,
            "commands": controller.surface.commands,
            "selected": selected.code if selected else None,
        }
    )


@require_POST
def map_close(request):
    snapshot = request.session.pop(MAP_SESSION_KEY, None)
    if snapshot is None:
        return JsonResponse({"commands": []})
    controller = MapInteractionController.restore(snapshot, current_index())
    controller.destroy()
    return JsonResponse({"commands": controller.surface.commands})


def lot_detail(request, code):
    lot = get_object_or_404(Lot.objects.select_related("zone"), code=code)
    detail = LotDetail.for_lot(lot, request.user.is_authenticated)
    if request.GET.get("format") == "json":
        return JsonResponse(asdict(detail))
    return render(request, "lotes/lot_detail.html", {"detail": detail, "lot": lot})


def lot_list_api(request):
    lots = Lot.objects.select_related("zone").all().order_by("feature_id")
    data = []
    for lot in lots:
        data.append(
            {
                "id": lot.code,
                "feature_id": lot.feature_id,
                "label": lot.label,
                "price": float(lot.price),
                "size_sqm": float(lot.size_sqm),
                "size_sqft": lot.size_sqft,
                "status": lot.status.lower(),
                "center": lot.center,
                "polygon": lot.polygon,
                "grid_row": lot.grid_row,
                "grid_col": lot.grid_col,
                "zone": {
                    "id": lot.zone.slug,
                    "name": lot.zone.name,
                    "zoning_type": lot.zone.zoning_type,
                },
            }
        )
    return JsonResponse({"lots": data, "count": len(data)})


def lot_geojson_api(request):
    return JsonResponse(current_index().to_geojson())


@admin_required
def admin_lot_list(request):
    lots = Lot.objects.select_related("zone").all().order_by("feature_id")
    status = request.GET.get("status")
    if status:
        lots = lots.filter(status=status.upper())
    return render(request, "lotes/admin_lot_list.html", {"lots": lots, "status": status})


@admin_required
def admin_lot_edit(request, lot_id):
    lot = get_object_or_404(Lot.objects.select_related("zone"), pk=lot_id)

    if request.method == "POST":
        data = request.POST
        price_raw = data.get("price")
        status = data.get("status") or lot.status
        if status not in dict(Lot.STATUS_CHOICES):
            messages.error(request, "Estado inválido.")
            return redirect("admin_lot_edit", lot_id=lot.id)
        if price_raw:
            try:
                price = Decimal(str(price_raw))
            except InvalidOperation:
                messages.error(request, "Precio inválido.")
                return redirect("admin_lot_edit", lot_id=lot.id)
            if price <= 0:
                messages.error(request, "El precio debe ser mayor a 0.")
                return redirect("admin_lot_edit", lot_id=lot.id)
            lot.price = price
        if status != lot.status:
            logger.info("Admin %s changed lot %s status %s -> %s", request.user.pk, lot.code, lot.status, status)
        lot.status = status
        lot.save(update_fields=["price", "status", "updated_at"])
        messages.success(request, f"Lote {lot.code} actualizado.")
        return redirect("admin_lot_list")

    context = {
        "form": {"price": lot.price, "status": lot.status},
        "lot": lot,
        "statuses": Lot.STATUS_CHOICES,
        "price_display": format_price(lot.price),
        "size_display": format_size(lot.size_sqm),
    }
    return render(request, "lotes/admin_lot_form.html", context)


@admin_required
def admin_zone_list(request):
    zones = Zone.objects.all().order_by("name")
    return render(request, "lotes/admin_zone_list.html", {"zones": zones})


@admin_required
def admin_zone_edit(request, zone_id):
    zone = get_object_or_404(Zone, pk=zone_id)

    if request.method == "POST":
        data = request.POST
        try:
            base_price = Decimal(str(data.get("base_price") or zone.base_price))
            lot_size = Decimal(str(data.get("lot_size_sqm") or zone.lot_size_sqm))
        except InvalidOperation:
            messages.error(request, "Precio o tamaño inválido.")
            return redirect("admin_zone_edit", zone_id=zone.id)
        # La geometría (corners) no se edita
        zone.name = data.get("name") or zone.name
        zone.zoning_type = data.get("zoning_type") or zone.zoning_type
        zone.base_price = base_price
        zone.lot_size_sqm = lot_size
        zone.description = data.get("description", zone.description)
        zone.save()
        messages.success(request, f"Zona {zone.name} actualizada.")
        return redirect("admin_zone_list")

    context = {
        "form": {
            "name": zone.name,
            "zoning_type": zone.zoning_type,
            "base_price": zone.base_price,
            "lot_size_sqm": zone.lot_size_sqm,
            "description": zone.description,
        },
        "zone": zone,
    }
    return render(request, "lotes/admin_zone_form.html", context)
