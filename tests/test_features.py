"""Tests for the GeoJSON projections and the feature-id index."""
from decimal import Decimal

import pytest

from LOTES.features import (
    FeatureIndex,
    format_price,
    format_size,
    lot_label_points,
    lots_to_features,
    zone_center,
    zone_label_points,
    zones_to_features,
)
from LOTES.models import Lot


def test_formatters():
    assert format_price(Decimal("78000")) == "$78,000 USD"
    assert format_price("68000.00") == "$68,000 USD"
    assert format_size(Decimal("55.00")) == "55 m²"
    assert format_size(Decimal("52.50")) == "52.5 m²"


def test_zone_center_is_mean_of_corners(zone):
    center = zone_center(zone)
    assert center[0] == pytest.approx(sum(c[0] for c in zone.corners) / 4)
    assert center[1] == pytest.approx(sum(c[1] for c in zone.corners) / 4)


def test_lot_features_are_keyed_by_feature_id(make_lot):
    a1 = make_lot(label="A1")
    a2 = make_lot(label="A2", price="71000", status=Lot.STATUS_SOLD)
    collection = lots_to_features([a1, a2])

    assert collection["type"] == "FeatureCollection"
    first, second = collection["features"]
    assert first["id"] == a1.feature_id
    assert second["id"] == a2.feature_id
    assert second["properties"] == {
        "id": "bajada-sur-A2",
        "zoneId": "bajada-sur",
        "zoneName": "Bajada Sur",
        "label": "A2",
        "status": "sold",
        "price": "$71,000 USD",
        "size": "52 m²",
        "zoning": "Residential",
    }
    assert first["geometry"]["coordinates"] == [a1.polygon]


def test_zone_ring_is_closed(zone):
    feature = zones_to_features([zone])["features"][0]
    ring = feature["geometry"]["coordinates"][0]
    assert len(ring) == 5
    assert ring[0] == ring[-1] == zone.corners[0]


def test_label_points(zone, lot):
    zone_point = zone_label_points([zone])["features"][0]
    assert zone_point["geometry"]["coordinates"] == zone_center(zone)
    assert zone_point["properties"]["name"] == "Bajada Sur"

    lot_point = lot_label_points([lot])["features"][0]
    assert lot_point["geometry"]["coordinates"] == lot.center
    assert lot_point["properties"]["label"] == "A1"


def test_index_resolves_feature_ids(seeded_lots, zone):
    index = FeatureIndex(seeded_lots, [zone])
    assert len(index) == 20
    assert index.lot_for(1).code == "bajada-sur-A1"
    assert index.lot_for("20").code == "bajada-sur-D5"
    assert index.lot_code_for(6) == "bajada-sur-B1"
    assert index.lot_by_code("bajada-sur-C3").feature_id == 13
    assert index.zone_for("bajada-sur") == zone


@pytest.mark.parametrize("bad", [None, 0, 999, "x", "", [1]])
def test_index_ignores_unknown_ids(seeded_lots, bad):
    index = FeatureIndex(seeded_lots)
    assert index.lot_for(bad) is None
    assert index.lot_code_for(bad) is None


def test_geojson_reflects_persisted_status(seeded_lots, zone):
    lot = seeded_lots[0]
    Lot.objects.filter(pk=lot.pk).update(status=Lot.STATUS_SOLD)

    fresh = FeatureIndex(Lot.objects.select_related("zone"), [zone]).to_geojson()
    assert set(fresh) == {"sublots", "zones", "zone_labels", "sublot_labels"}
    statuses = {f["properties"]["id"]: f["properties"]["status"] for f in fresh["sublots"]["features"]}
    assert statuses[lot.code] == "sold"
    assert len(fresh["sublots"]["features"]) == 20
