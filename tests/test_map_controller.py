"""Tests for map interaction state: selection, hover, camera and popup."""
import pytest

from LOTES.features import FeatureIndex, zone_center
from LOTES.map_controller import CommandSurface, FeatureStateTable, MapInteractionController, lot_popup
from LOTES.map_style import resolve_paint
from LOTES.models import Lot


@pytest.fixture
def index(seeded_lots, zone):
    return FeatureIndex(seeded_lots, [zone])


@pytest.fixture
def controller(index):
    return MapInteractionController(CommandSurface(), index)


def ops(surface):
    return [c["op"] for c in surface.commands]


def test_click_selects_and_flies_to_lot(controller, index, settings):
    lot = controller.click(3)
    assert lot.code == "bajada-sur-A3"
    assert controller.selected_code == lot.code
    assert controller.surface.features_with("selected") == [3]

    fly = next(c for c in controller.surface.commands if c["op"] == "flyTo")
    assert fly["center"] == list(lot.center)
    assert fly["zoom"] == settings.MAP_LOT_ZOOM
    assert fly["duration"] == settings.MAP_LOT_FLY_MS
    popup = next(c for c in controller.surface.commands if c["op"] == "showPopup")["popup"]
    assert popup["lot_code"] == lot.code


def test_only_one_lot_selected_after_any_sequence(controller):
    for fid in [1, 5, 5, 12, 2, 20, 1]:
        controller.click(fid)
        assert len(controller.surface.features_with("selected")) == 1
    assert controller.surface.features_with("selected") == [1]


def test_reselecting_same_lot_is_idempotent(controller):
    controller.click(7)
    controller.surface.commands.clear()
    controller.click(7)

    assert controller.selected_code == "bajada-sur-B2"
    assert controller.surface.features_with("selected") == [7]
    assert "flyTo" in ops(controller.surface)
    assert ops(controller.surface).count("showPopup") == 1


def test_unknown_feature_click_is_noop(controller):
    controller.click(4)
    controller.surface.commands.clear()

    assert controller.click(999) is None
    assert controller.click(None) is None
    assert controller.surface.commands == []
    assert controller.selected_code == "bajada-sur-A4"


def test_hover_moves_flag_and_leave_clears_it(controller):
    controller.hover(2)
    controller.hover(2)
    assert controller.surface.commands == [
        {"op": "setFeatureState", "source": "sublots", "id": 2, "state": {"hover": True}},
    ]
    controller.hover(3)
    assert controller.surface.features_with("hover") == [3]
    controller.leave()
    assert controller.surface.features_with("hover") == []
    assert controller.hovered_id is None


def test_hover_and_selected_are_independent(controller):
    controller.click(5)
    controller.hover(5)
    assert controller.surface.feature_state.get(5) == {"selected": True, "hover": True}
    controller.leave()
    assert controller.surface.feature_state.get(5) == {"selected": True, "hover": False}


def test_fly_to_zone_keeps_selection(controller, zone, settings):
    controller.click(9)
    controller.fly_to_zone("bajada-sur")

    assert controller.selected_code == "bajada-sur-B4"
    camera = controller.surface.camera
    assert camera.center == zone_center(zone)
    assert camera.zoom == settings.MAP_ZONE_ZOOM
    assert camera.duration == settings.MAP_ZONE_FLY_MS
    assert controller.fly_to_zone("no-such-zone") is None


def test_overlapping_flights_replace_each_other(controller):
    controller.click(1)
    controller.fly_to_zone("bajada-sur")
    flights = [c for c in controller.surface.commands if c["op"] == "flyTo"]

    assert flights[0]["animation_id"] == 1
    assert "replaces" not in flights[0]
    assert flights[1]["animation_id"] == 2
    assert flights[1]["replaces"] == 1
    assert controller.surface.camera.animation_id == 2


def test_popup_reserve_action_only_when_available(seeded_lots):
    lot = seeded_lots[0]
    lot.status = Lot.STATUS_SOLD
    assert [a["kind"] for a in lot_popup(lot, is_authenticated=True).actions] == ["view_details"]

    lot.status = Lot.STATUS_AVAILABLE
    kinds = [a["kind"] for a in lot_popup(lot, is_authenticated=True).actions]
    assert kinds == ["view_details", "reserve"]

    anonymous = lot_popup(lot, is_authenticated=False).actions[1]
    assert anonymous["url"].startswith("/cuenta/login/?next=")


def test_stale_events_are_dropped(controller):
    assert controller.accept(1)
    assert controller.accept(3)
    assert not controller.accept(2)
    assert not controller.accept(3)
    assert controller.last_seq == 3


def test_snapshot_round_trip_restores_state(controller, index):
    controller.click(6)
    controller.hover(8)
    controller.accept(4)

    restored = MapInteractionController.restore(controller.snapshot(), index)
    assert restored.selected_code == "bajada-sur-B1"
    assert restored.hovered_id == 8
    assert restored.last_seq == 4
    assert restored.surface.features_with("selected") == [6]
    assert restored.surface.popup_open

    restored.click(10)
    assert restored.surface.features_with("selected") == [10]
    assert restored.surface.commands[0] == {
        "op": "setFeatureState", "source": "sublots", "id": 6, "state": {"selected": False},
    }


def test_handle_dispatches_and_rejects_unknown(controller):
    controller.handle({"type": "select", "lot_id": "bajada-sur-A2"})
    assert controller.selected_code == "bajada-sur-A2"
    controller.handle({"type": "close_popup"})
    assert not controller.surface.popup_open
    with pytest.raises(ValueError):
        controller.handle({"type": "zoom"})


def test_destroy_clears_everything(controller):
    controller.click(2)
    controller.hover(3)
    controller.destroy()

    assert controller.selected_code is None
    assert controller.hovered_id is None
    assert controller.surface.camera is None
    assert controller.surface.feature_state.to_dict() == {}
    assert controller.surface.commands[-1] == {"op": "remove"}


def test_feature_state_table_drops_cleared_entries():
    table = FeatureStateTable({"4": {"hover": True}})
    assert table.get(4) == {"hover": True}
    table.set(4, hover=False)
    assert table.to_dict() == {}


def test_paint_resolution():
    assert resolve_paint("available") == {
        "fill_color": "rgba(52,211,153,0.3)",
        "fill_opacity": 0.5,
        "line_color": "#34d399",
        "line_width": 1.5,
    }
    hovered = resolve_paint("reserved", hover=True)
    assert hovered["fill_opacity"] == 0.8
    assert hovered["line_width"] == 2.5
    selected = resolve_paint("SOLD", hover=True, selected=True)
    assert selected["line_color"] == "#0ea5e9"
    assert selected["line_width"] == 3.5
    assert selected["fill_color"] == "rgba(239,68,68,0.25)"


def test_popup_details_use_status_label(seeded_lots):
    lot = seeded_lots[0]
    lot.status = Lot.STATUS_AVAILABLE
    popup = lot_popup(lot, is_authenticated=True)

    assert popup.details == "52 m² • Residential • Disponible"
    assert popup.status == "available"


def test_bad_seq_is_treated_as_stale(controller):
    controller.accept(2)
    assert not controller.accept("abc")
    assert not controller.accept([3])
    assert controller.last_seq == 2
