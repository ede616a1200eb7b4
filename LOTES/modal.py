"""Lot detail modal: what it shows and which call to action it offers."""
from dataclasses import dataclass, field
from urllib.parse import urlencode

from django.urls import reverse

from .features import format_price, format_size

CLOSE_KEYS = ("Escape", "Esc")


def reserve_url(lot):
    return f"{reverse('reserve')}?{urlencode({'lot': lot.code})}"


def login_then(url):
    return f"{reverse('login')}?{urlencode({'next': url})}"


def reserve_action(lot, is_authenticated):
    target = reserve_url(lot)
    return {
        "kind": "reserve",
        "label": "Reserve This Lot",
        "lot": lot.code,
        "url": target if is_authenticated else login_then(target),
    }


def request_info_action(lot):
    return {
        "kind": "request_info",
        "label": "Request More Information",
        "lot": lot.code,
        "url": f"{reverse('ticket_create')}?{urlencode({'lot': lot.code})}",
    }


def call_to_action(lot, is_authenticated):
    if lot.is_available:
        return reserve_action(lot, is_authenticated)
    return request_info_action(lot)


@dataclass
class LotDetail:
    code: str
    title: str
    subtitle: str
    size: str
    size_sqft: str
    price: str
    zoning: str
    status: str
    description: str
    gallery: list = field(default_factory=list)
    model_3d_url: str = ""
    action: dict = field(default_factory=dict)

    @classmethod
    def for_lot(cls, lot, is_authenticated):
        zone = lot.zone
        return cls(
            code=lot.code,
            title=f"{zone.name} — Lot {lot.label}",
            subtitle=f"Santo Tomas Nuevo, B.C. • {zone.name}",
            size=format_size(lot.size_sqm),
            size_sqft=f"{lot.size_sqft:,} ft²",
            price=format_price(lot.price),
            zoning=zone.zoning_type,
            status=lot.get_status_display(),
            description=zone.description,
            gallery=list(zone.images or []),
            model_3d_url=zone.model_3d_url,
            action=call_to_action(lot, is_authenticated),
        )


class LotModal:
    """Open/closed state of the detail modal."""

    def __init__(self):
        self.detail = None

    @property
    def is_open(self):
        return self.detail is not None

    def open(self, lot, is_authenticated):
        self.detail = LotDetail.for_lot(lot, is_authenticated)
        return self.detail

    def close(self):
        self.detail = None

    def on_key(self, key):
        if key in CLOSE_KEYS:
            self.close()

    def on_backdrop_click(self, inside_dialog):
        if not inside_dialog:
            self.close()
