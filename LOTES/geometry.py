"""
Subdivision of a zone into a grid of lots.

A zone is an arbitrary quadrilateral given by its corners in TL, TR, BR, BL
order. Each lot is a cell of a C x R logical grid mapped onto the zone with
bilinear interpolation, shrunk by a small gap so neighbours do not touch.
Status and price come from a deterministic hash of the zone identifier, so
running the generator twice over the same zone gives the same lots.
"""
import itertools
import string
from dataclasses import dataclass, field
from decimal import Decimal

ROW_LABELS = string.ascii_uppercase
LOT_GAP = 0.07

# Cubetas de 0..99: <60 disponible, <82 reservado, resto vendido
STATUS_BUCKETS = ((60, "AVAILABLE"), (82, "RESERVED"), (100, "SOLD"))
PRICE_STEP = 1000


@dataclass
class GeneratedLot:
    code: str
    zone_slug: str
    label: str
    status: str
    price: Decimal
    size_sqm: Decimal
    center: list
    polygon: list
    grid_row: int
    grid_col: int
    feature_id: int = 0

    def as_model_kwargs(self):
        return {
            "code": self.code,
            "label": self.label,
            "status": self.status,
            "price": self.price,
            "size_sqm": self.size_sqm,
            "center": self.center,
            "polygon": self.polygon,
            "grid_row": self.grid_row,
            "grid_col": self.grid_col,
            "feature_id": self.feature_id,
        }


@dataclass
class ZoneSpec:
    slug: str
    corners: list
    base_price: Decimal
    lot_size_sqm: Decimal
    extra: dict = field(default_factory=dict)


def bilerp(corners, u, v):
    """Map (u, v) in the unit square onto the quadrilateral ``corners``.

    Exact at the four corners: (0,0)->TL, (1,0)->TR, (1,1)->BR, (0,1)->BL.
    """
    tl, tr, br, bl = corners
    w_tl = (1 - u) * (1 - v)
    w_tr = u * (1 - v)
    w_br = u * v
    w_bl = (1 - u) * v
    return [
        w_tl * tl[0] + w_tr * tr[0] + w_br * br[0] + w_bl * bl[0],
        w_tl * tl[1] + w_tr * tr[1] + w_br * br[1] + w_bl * bl[1],
    ]


def zone_seed(slug):
    return ord(slug[0]) + ord(slug[-1])


def status_for(seed, index):
    bucket = (seed * 31 + index * 17) % 100
    for limit, status in STATUS_BUCKETS:
        if bucket < limit:
            return status
    return STATUS_BUCKETS[-1][1]


def price_variation(seed, index):
    # -10 .. +9 pasos de 1000
    return ((seed * 7 + index * 13) % 20 - 10) * PRICE_STEP


def cell_polygon(corners, row, col, rows, cols, gap=LOT_GAP):
    u0, u1 = (col + gap) / cols, (col + 1 - gap) / cols
    v0, v1 = (row + gap) / rows, (row + 1 - gap) / rows
    tl = bilerp(corners, u0, v0)
    tr = bilerp(corners, u1, v0)
    br = bilerp(corners, u1, v1)
    bl = bilerp(corners, u0, v1)
    return [tl, tr, br, bl, list(tl)]


def generate_sublots(zone, cols, rows, gap=LOT_GAP):
    """Return ``cols * rows`` lots for ``zone`` in row-major order.

    ``zone`` is anything with ``slug``, ``corners``, ``base_price`` and
    ``lot_size_sqm`` attributes (a ``Zone`` model or a ``ZoneSpec``).
    Feature ids are left at 0; ``assign_feature_ids`` numbers a whole run.
    """
    if len(zone.corners) != 4:
        raise ValueError(f"Zone {zone.slug!r} must have exactly 4 corners")
    if cols < 1 or rows < 1:
        raise ValueError("Grid needs at least one row and one column")
    if rows > len(ROW_LABELS):
        raise ValueError(f"At most {len(ROW_LABELS)} rows can be labelled")

    seed = zone_seed(zone.slug)
    base_price = Decimal(zone.base_price)
    size = Decimal(zone.lot_size_sqm)
    lots = []
    index = 0
    for row in range(rows):
        for col in range(cols):
            label = f"{ROW_LABELS[row]}{col + 1}"
            center = bilerp(zone.corners, (col + 0.5) / cols, (row + 0.5) / rows)
            lots.append(
                GeneratedLot(
                    code=f"{zone.slug}-{label}",
                    zone_slug=zone.slug,
                    label=label,
                    status=status_for(seed, index),
                    price=base_price + price_variation(seed, index),
                    size_sqm=size,
                    center=center,
                    polygon=cell_polygon(zone.corners, row, col, rows, cols, gap),
                    grid_row=row,
                    grid_col=col,
                )
            )
            index += 1
    return lots


def assign_feature_ids(lots, start=1):
    counter = itertools.count(start)
    for lot in lots:
        lot.feature_id = next(counter)
    return lots


def generate_run(zones, cols, rows, start=1):
    """Generate lots for every zone with one feature-id counter for the run."""
    lots = []
    for zone in zones:
        lots.extend(generate_sublots(zone, cols, rows))
    return assign_feature_ids(lots, start=start)
