"""Pytest fixtures shared by the portal tests."""
import itertools
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from LOTES.geometry import bilerp, cell_polygon, generate_run
from LOTES.models import Lot, Zone

BAJADA_SUR_CORNERS = [
    [-116.6033, 31.4858],
    [-116.6018, 31.4856],
    [-116.6003, 31.4824],
    [-116.6033, 31.4824],
]


@pytest.fixture(autouse=True)
def portal_settings(settings, tmp_path):
    """Keep tests off Mailjet and on the default reservation policy."""
    settings.MJ_APIKEY_PUBLIC = ""
    settings.MJ_APIKEY_PRIVATE = ""
    settings.RESERVATION_REQUIRES_APPROVAL = False
    settings.RESERVATION_FEE = 5000
    settings.MEDIA_ROOT = tmp_path / "media"
    settings.MAPBOX_TOKEN = "pk.test"


@pytest.fixture
def buyer(db):
    User = get_user_model()
    return User.objects.create_user(
        username="ana@example.com", email="ana@example.com", password="s3cret-pass", role="CLIENT"
    )


@pytest.fixture
def other_buyer(db):
    User = get_user_model()
    return User.objects.create_user(
        username="beto@example.com", email="beto@example.com", password="s3cret-pass", role="CLIENT"
    )


@pytest.fixture
def staff(db):
    User = get_user_model()
    return User.objects.create_user(
        username="admin@example.com", email="admin@example.com", password="s3cret-pass", role="ADMIN"
    )


@pytest.fixture
def buyer_client(client, buyer):
    client.force_login(buyer)
    return client


@pytest.fixture
def staff_client(client, staff):
    client.force_login(staff)
    return client


@pytest.fixture
def zone(db):
    return Zone.objects.create(
        slug="bajada-sur",
        name="Bajada Sur",
        zoning_type="Residential",
        base_price=Decimal("68000"),
        lot_size_sqm=Decimal("52"),
        description="Lower western slope following the main access road.",
        corners=BAJADA_SUR_CORNERS,
        images=["https://images.example.com/bajada-1.jpg"],
    )


@pytest.fixture
def make_lot(zone):
    """Create lots in row A of ``zone``; feature ids count up from 1."""
    ids = itertools.count(1)

    def _make(label=None, price="68000", status=Lot.STATUS_AVAILABLE):
        fid = next(ids)
        col = fid - 1
        label = label or f"A{fid}"
        return Lot.objects.create(
            zone=zone,
            code=f"{zone.slug}-{label}",
            label=label,
            price=Decimal(price),
            size_sqm=zone.lot_size_sqm,
            status=status,
            polygon=cell_polygon(zone.corners, 0, col, 4, 5),
            center=bilerp(zone.corners, (col + 0.5) / 5, 0.5 / 4),
            grid_row=0,
            grid_col=col,
            feature_id=fid,
        )

    return _make


@pytest.fixture
def lot(make_lot):
    return make_lot(label="A1", price="68000")


@pytest.fixture
def seeded_lots(zone):
    generated = generate_run([zone], 5, 4)
    Lot.objects.bulk_create([Lot(zone=zone, **g.as_model_kwargs()) for g in generated])
    return list(Lot.objects.select_related("zone").order_by("feature_id"))
