from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

SQM_TO_SQFT = Decimal("10.7639")


class Zone(models.Model):
    slug = models.SlugField(max_length=50, unique=True)  # loma-poniente, bajada-sur, ...
    name = models.CharField(max_length=100)
    zoning_type = models.CharField(max_length=50)
    base_price = models.DecimalField(max_digits=12, decimal_places=2)
    lot_size_sqm = models.DecimalField(max_digits=8, decimal_places=2)
    description = models.TextField(blank=True)

    # Esquinas en orden TL, TR, BR, BL como pares [lng, lat]
    corners = models.JSONField(default=list)
    images = models.JSONField(default=list, blank=True)
    model_3d_url = models.URLField(blank=True)
    camera_orbit = models.CharField(max_length=50, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def clean(self):
        corners = self.corners or []
        if len(corners) != 4 or any(len(c) != 2 for c in corners):
            raise ValidationError({"corners": "A zone needs exactly four [lng, lat] corners."})


class Lot(models.Model):
    STATUS_AVAILABLE = "AVAILABLE"
    STATUS_RESERVED = "RESERVED"
    STATUS_SOLD = "SOLD"
    STATUS_CHOICES = (
        (STATUS_AVAILABLE, "Disponible"),
        (STATUS_RESERVED, "Reservado"),
        (STATUS_SOLD, "Vendido"),
    )

    code = models.CharField(max_length=80, unique=True)  # bajada-sur-A1
    zone = models.ForeignKey(Zone, on_delete=models.CASCADE, related_name="lots")
    label = models.CharField(max_length=10)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    size_sqm = models.DecimalField(max_digits=8, decimal_places=2)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_AVAILABLE)

    # Para mapa interactivo
    polygon = models.JSONField(default=list)
    center = models.JSONField(default=list)
    grid_row = models.PositiveSmallIntegerField(default=0)
    grid_col = models.PositiveSmallIntegerField(default=0)
    feature_id = models.PositiveIntegerField(unique=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["feature_id"]

    def __str__(self):
        return self.code

    @property
    def size_sqft(self):
        return int((self.size_sqm * SQM_TO_SQFT).quantize(Decimal("1")))

    @property
    def is_available(self):
        return self.status == self.STATUS_AVAILABLE
