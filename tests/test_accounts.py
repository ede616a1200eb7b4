"""Tests for sign-up, activation and role management."""
from django.contrib.auth import get_user_model
from django.contrib.auth.tokens import default_token_generator
from django.urls import reverse
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode

from USERS.models import Document


def test_register_creates_inactive_client(client, db):
    response = client.post(reverse("register"), {
        "email": "Carla@Example.com",
        "first_name": "Carla",
        "last_name": "Ruiz",
        "phone": "+52 646 000 0000",
        "password1": "Terreno-Baja-2025",
        "password2": "Terreno-Baja-2025",
    })

    assert response.status_code == 200
    user = get_user_model().objects.get(email="carla@example.com")
    assert user.username == "carla@example.com"
    assert not user.is_active
    assert user.role == "CLIENT"
    assert Document.objects.filter(user=user, status=Document.STATUS_REQUIRED).count() == 6


def test_activation_link(client, db):
    user = get_user_model().objects.create_user(username="d@example.com", email="d@example.com", password="x", is_active=False)
    uid = urlsafe_base64_encode(force_bytes(user.pk))
    token = default_token_generator.make_token(user)

    response = client.get(reverse("activate_account", args=[uid, token]))
    assert response.status_code == 302
    user.refresh_from_db()
    assert user.is_active


def test_bad_activation_link(client, buyer):
    response = client.get(reverse("activate_account", args=["xx", "bad-token"]))
    assert response.status_code == 302
    assert response.url == reverse("login")


def test_admin_changes_role(staff_client, buyer):
    staff_client.post(reverse("admin_user_list"), {"user": buyer.pk, "role": "ADMIN"})
    buyer.refresh_from_db()
    assert buyer.is_admin


def test_admin_cannot_demote_self(staff_client, staff):
    staff_client.post(reverse("admin_user_list"), {"user": staff.pk, "role": "CLIENT"})
    staff.refresh_from_db()
    assert staff.role == "ADMIN"


def test_logout_returns_to_map(buyer_client):
    response = buyer_client.get(reverse("logout"))
    assert response.url == reverse("lot_map")
