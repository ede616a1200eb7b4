"""Tests for the zone subdivision generator."""
from decimal import Decimal

import pytest
from shapely.geometry import Point, Polygon

from LOTES.geometry import (
    LOT_GAP,
    ZoneSpec,
    bilerp,
    generate_run,
    generate_sublots,
    price_variation,
    status_for,
    zone_seed,
)

CORNERS = [
    [-116.6033, 31.4882],
    [-116.6005, 31.4880],
    [-116.6018, 31.4856],
    [-116.6033, 31.4858],
]


def spec(slug="loma-poniente", corners=CORNERS, base_price="78000", size="55"):
    return ZoneSpec(slug=slug, corners=corners, base_price=Decimal(base_price), lot_size_sqm=Decimal(size))


def test_bilerp_exact_at_corners():
    """(0,0),(1,0),(1,1),(0,1) map onto TL, TR, BR, BL exactly."""
    tl, tr, br, bl = CORNERS
    assert bilerp(CORNERS, 0, 0) == tl
    assert bilerp(CORNERS, 1, 0) == tr
    assert bilerp(CORNERS, 1, 1) == br
    assert bilerp(CORNERS, 0, 1) == bl


def test_bilerp_midpoint_is_corner_mean():
    point = bilerp(CORNERS, 0.5, 0.5)
    assert point[0] == pytest.approx(sum(c[0] for c in CORNERS) / 4)
    assert point[1] == pytest.approx(sum(c[1] for c in CORNERS) / 4)


@pytest.mark.parametrize("cols,rows", [(1, 1), (5, 4), (3, 7), (10, 2)])
def test_generates_cols_times_rows(cols, rows):
    lots = generate_sublots(spec(), cols, rows)
    assert len(lots) == cols * rows
    assert len({lot.code for lot in lots}) == cols * rows


def test_labels_go_by_row_then_column():
    lots = generate_sublots(spec(), 3, 2)
    assert [lot.label for lot in lots] == ["A1", "A2", "A3", "B1", "B2", "B3"]
    assert lots[0].code == "loma-poniente-A1"
    assert (lots[4].grid_row, lots[4].grid_col) == (1, 1)


def test_polygons_are_closed_rings_inside_the_zone():
    zone_shape = Polygon(CORNERS)
    for lot in generate_sublots(spec(), 5, 4):
        assert len(lot.polygon) == 5
        assert lot.polygon[0] == lot.polygon[-1]
        cell = Polygon(lot.polygon)
        assert cell.is_valid
        assert zone_shape.contains(cell)


def test_neighbouring_lots_do_not_touch():
    lots = generate_sublots(spec(), 5, 4)
    shapes = [Polygon(lot.polygon) for lot in lots]
    for i, a in enumerate(shapes):
        for b in shapes[i + 1:]:
            assert not a.intersects(b)


def test_center_lies_inside_its_polygon():
    for lot in generate_sublots(spec(), 5, 4):
        assert Polygon(lot.polygon).contains(Point(lot.center))


def test_generation_is_deterministic():
    first = generate_sublots(spec(), 5, 4)
    second = generate_sublots(spec(), 5, 4)
    assert [(l.status, l.price) for l in first] == [(l.status, l.price) for l in second]
    assert [l.polygon for l in first] == [l.polygon for l in second]


def test_status_buckets_follow_the_hash():
    seed = zone_seed("bajada-sur")
    assert seed == ord("b") + ord("r")
    for index in range(20):
        bucket = (seed * 31 + index * 17) % 100
        expected = "AVAILABLE" if bucket < 60 else "RESERVED" if bucket < 82 else "SOLD"
        assert status_for(seed, index) == expected


def test_price_variation_is_bounded_in_thousand_steps():
    seed = zone_seed("mesa-norte")
    for index in range(40):
        variation = price_variation(seed, index)
        assert -10000 <= variation <= 9000
        assert variation % 1000 == 0


def test_prices_are_base_plus_variation():
    seed = zone_seed("loma-poniente")
    lots = generate_sublots(spec(), 5, 4)
    for index, lot in enumerate(lots):
        assert lot.price == Decimal("78000") + price_variation(seed, index)
        assert lot.size_sqm == Decimal("55")


def test_feature_ids_unique_across_a_run():
    zones = [
        spec("loma-poniente"),
        spec("bajada-sur"),
        spec("ribera-este"),
    ]
    lots = generate_run(zones, 5, 4)
    ids = [lot.feature_id for lot in lots]
    assert len(ids) == 60
    assert ids == list(range(1, 61))


def test_rejects_bad_zone_or_grid():
    with pytest.raises(ValueError):
        generate_sublots(spec(corners=CORNERS[:3]), 5, 4)
    with pytest.raises(ValueError):
        generate_sublots(spec(), 0, 4)
    with pytest.raises(ValueError):
        generate_sublots(spec(), 2, 27)


def test_gap_shrinks_cells():
    full = generate_sublots(spec(), 2, 2, gap=0)
    gapped = generate_sublots(spec(), 2, 2, gap=LOT_GAP)
    for a, b in zip(full, gapped):
        assert Polygon(b.polygon).area < Polygon(a.polygon).area
