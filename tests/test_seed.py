"""Tests for the seed_lots and create_admin management commands."""
import pytest
from django.contrib.auth import get_user_model
from django.core.management import CommandError, call_command

from LOTES.models import Lot, Zone


@pytest.mark.django_db
def test_seed_builds_six_zones_of_twenty():
    call_command("seed_lots")

    assert Zone.objects.count() == 6
    assert Lot.objects.count() == 120
    assert list(Lot.objects.order_by("feature_id").values_list("feature_id", flat=True)) == list(range(1, 121))
    assert Lot.objects.get(feature_id=1).code == "loma-poniente-A1"
    assert Lot.objects.filter(zone__slug="valle-central").count() == 20


@pytest.mark.django_db
def test_seed_refuses_to_run_twice():
    call_command("seed_lots")
    with pytest.raises(CommandError):
        call_command("seed_lots")

    call_command("seed_lots", "--reset")
    assert Lot.objects.count() == 120


@pytest.mark.django_db
def test_create_admin_from_env(monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAME", "root")
    monkeypatch.setenv("ADMIN_EMAIL", "root@example.com")
    monkeypatch.setenv("ADMIN_PASSWORD", "Cambiar-123")

    call_command("create_admin")
    call_command("create_admin")

    admin = get_user_model().objects.get(username="root")
    assert admin.is_superuser
    assert admin.role == "ADMIN"
    assert admin.kyc_status == "APPROVED"


def test_create_admin_needs_env(monkeypatch):
    for name in ("ADMIN_USERNAME", "ADMIN_EMAIL", "ADMIN_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    with pytest.raises(CommandError):
        call_command("create_admin")
