"""
Map interaction state for one browser session.

The browser owns the Mapbox instance; the server owns the interaction state.
Pointer events from the page are posted to ``map_event`` and handled by a
``MapInteractionController``, which changes the map only through a
``MapSurface``. ``CommandSurface`` keeps the per-feature flags (hover,
selected) in a side table keyed by feature id and records every change as a
command the page replays on the real renderer. Lot records never carry these
flags.
"""
import logging
from dataclasses import asdict, dataclass, field

from django.conf import settings

from .features import format_price, format_size, zone_center
from .modal import reserve_action

logger = logging.getLogger(__name__)


@dataclass
class CameraMove:
    center: list
    zoom: float
    duration: int
    animation_id: int
    pitch: int = 0
    bearing: int = 0
    essential: bool = True


@dataclass
class LotPopup:
    lot_code: str
    title: str
    details: str
    price: str
    status: str
    center: list
    actions: list = field(default_factory=list)


class FeatureStateTable:
    def __init__(self, states=None):
        self._states = {int(fid): dict(flags) for fid, flags in (states or {}).items()}

    def get(self, feature_id):
        return dict(self._states.get(int(feature_id), {}))

    def set(self, feature_id, **flags):
        state = self._states.setdefault(int(feature_id), {})
        state.update(flags)
        if not any(state.values()):
            del self._states[int(feature_id)]

    def with_flag(self, flag):
        return sorted(fid for fid, state in self._states.items() if state.get(flag))

    def clear(self):
        self._states.clear()

    def to_dict(self):
        # Las sesiones serializan a JSON: claves como texto
        return {str(fid): dict(flags) for fid, flags in self._states.items()}


class MapSurface:
    """What the controller may do to a rendered map."""

    def set_feature_state(self, feature_id, **flags):
        raise NotImplementedError

    def features_with(self, flag):
        raise NotImplementedError

    def fly_to(self, center, zoom, duration):
        raise NotImplementedError

    def show_popup(self, popup):
        raise NotImplementedError

    def close_popup(self):
        raise NotImplementedError

    def destroy(self):
        raise NotImplementedError


class CommandSurface(MapSurface):
    source = "sublots"

    def __init__(self, feature_state=None, camera=None, popup_open=False):
        self.feature_state = FeatureStateTable(feature_state)
        self.camera = CameraMove(**camera) if camera else None
        self.popup_open = popup_open
        self.commands = []

    def set_feature_state(self, feature_id, **flags):
        self.feature_state.set(feature_id, **flags)
        self.commands.append(
            {"op": "setFeatureState", "source": self.source, "id": int(feature_id), "state": flags}
        )

    def features_with(self, flag):
        return self.feature_state.with_flag(flag)

    def fly_to(self, center, zoom, duration):
        previous = self.camera
        animation_id = previous.animation_id + 1 if previous else 1
        self.camera = CameraMove(center=list(center), zoom=zoom, duration=duration, animation_id=animation_id)
        command = {"op": "flyTo", **asdict(self.camera)}
        if previous is not None:
            # Mapbox interrumpe el vuelo en curso; el último destino gana
            command["replaces"] = previous.animation_id
        self.commands.append(command)
        return self.camera

    def show_popup(self, popup):
        if self.popup_open:
            self.commands.append({"op": "removePopup"})
        self.popup_open = True
        self.commands.append({"op": "showPopup", "popup": asdict(popup)})

    def close_popup(self):
        if self.popup_open:
            self.popup_open = False
            self.commands.append({"op": "removePopup"})

    def destroy(self):
        self.feature_state.clear()
        self.camera = None
        self.popup_open = False
        self.commands.append({"op": "remove"})

    def snapshot(self):
        return {
            "feature_state": self.feature_state.to_dict(),
            "camera": asdict(self.camera) if self.camera else None,
            "popup_open": self.popup_open,
        }


def lot_popup(lot, is_authenticated):
    zone = lot.zone
    actions = [{"kind": "view_details", "label": "View Details", "lot": lot.code}]
    if lot.is_available:
        actions.append(reserve_action(lot, is_authenticated))
    return LotPopup(
        lot_code=lot.code,
        title=f"{zone.name} — Lot {lot.label}",
        details=f"{format_size(lot.size_sqm)} • {zone.zoning_type} • {lot.get_status_display()}",
        price=format_price(lot.price),
        status=lot.status.lower(),
        center=list(lot.center),
        actions=actions,
    )


class MapInteractionController:
    def __init__(self, surface, index, is_authenticated=False, selected_code=None, hovered_id=None, last_seq=0):
        self.surface = surface
        self.index = index
        self.is_authenticated = is_authenticated
        self.selected_code = selected_code
        self.hovered_id = hovered_id
        self.last_seq = last_seq

    @property
    def selected_lot(self):
        if self.selected_code is None:
            return None
        return self.index.lot_by_code(self.selected_code)

    def accept(self, seq):
        """Drop events older than the newest one already handled."""
        if seq is None:
            return True
        try:
            seq = int(seq)
        except (TypeError, ValueError):
            logger.debug("Discarding map event with bad seq %r", seq)
            return False
        if seq <= self.last_seq:
            logger.debug("Discarding stale map event %s (last %s)", seq, self.last_seq)
            return False
        self.last_seq = seq
        return True

    def select_lot(self, lot):
        for fid in self.surface.features_with("selected"):
            if fid != lot.feature_id:
                self.surface.set_feature_state(fid, selected=False)
        self.surface.close_popup()

        self.selected_code = lot.code
        self.surface.set_feature_state(lot.feature_id, selected=True)
        self.surface.fly_to(lot.center, settings.MAP_LOT_ZOOM, settings.MAP_LOT_FLY_MS)
        self.surface.show_popup(lot_popup(lot, self.is_authenticated))
        return lot

    def click(self, feature_id):
        lot = self.index.lot_for(feature_id)
        if lot is None:
            return None
        return self.select_lot(lot)

    def hover(self, feature_id):
        if self.index.lot_for(feature_id) is None:
            return self.leave()
        feature_id = int(feature_id)
        if feature_id == self.hovered_id:
            return
        if self.hovered_id is not None:
            self.surface.set_feature_state(self.hovered_id, hover=False)
        self.hovered_id = feature_id
        self.surface.set_feature_state(feature_id, hover=True)

    def leave(self):
        if self.hovered_id is not None:
            self.surface.set_feature_state(self.hovered_id, hover=False)
            self.hovered_id = None

    def fly_to_zone(self, slug):
        zone = self.index.zone_for(slug)
        if zone is None:
            return None
        return self.surface.fly_to(zone_center(zone), settings.MAP_ZONE_ZOOM, settings.MAP_ZONE_FLY_MS)

    def close_popup(self):
        self.surface.close_popup()

    def handle(self, event):
        kind = event.get("type")
        if kind == "click":
            self.click(event.get("feature_id"))
        elif kind == "hover":
            self.hover(event.get("feature_id"))
        elif kind == "leave":
            self.leave()
        elif kind == "fly_to_zone":
            self.fly_to_zone(event.get("zone_id"))
        elif kind == "select":
            lot = self.index.lot_by_code(event.get("lot_id"))
            if lot is not None:
                self.select_lot(lot)
        elif kind == "close_popup":
            self.close_popup()
        else:
            raise ValueError(f"Unknown map event {kind!r}")

    def snapshot(self):
        return {
            "selected_code": self.selected_code,
            "hovered_id": self.hovered_id,
            "last_seq": self.last_seq,
            "surface": self.surface.snapshot(),
        }

    @classmethod
    def restore(cls, snapshot, index, is_authenticated=False):
        surface = CommandSurface(**snapshot.get("surface", {}))
        return cls(
            surface,
            index,
            is_authenticated=is_authenticated,
            selected_code=snapshot.get("selected_code"),
            hovered_id=snapshot.get("hovered_id"),
            last_seq=snapshot.get("last_seq", 0),
        )

    def destroy(self):
        self.surface.destroy()
        self.selected_code = None
        self.hovered_id = None
