from decimal import Decimal

from django.db import models
from django.conf import settings
from LOTES.models import Lot


class Reservation(models.Model):
    STATUS_PENDING = "PENDING"
    STATUS_ACTIVE = "ACTIVE"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_CANCELLED = "CANCELLED"
    STATUS_EXPIRED = "EXPIRED"
    STATUS_CHOICES = (
        (STATUS_PENDING, "Pendiente"),
        (STATUS_ACTIVE, "Activa"),
        (STATUS_COMPLETED, "Completada"),
        (STATUS_CANCELLED, "Cancelada"),
        (STATUS_EXPIRED, "Vencida"),
    )
    OPEN_STATUSES = (STATUS_PENDING, STATUS_ACTIVE)

    PLAN_MONTHLY = "monthly"
    PLAN_ONE_TIME = "one-time"

    client = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reservations")
    lot = models.ForeignKey(Lot, on_delete=models.PROTECT, related_name="reservations")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    amount_due = models.DecimalField(max_digits=12, decimal_places=2)
    amount_paid = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    reservation_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    payment_plan = models.CharField(max_length=20, blank=True)
    next_payment_due = models.DateField(null=True, blank=True)
    expiry_date = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            # Un solo apartado abierto por lote
            models.UniqueConstraint(
                fields=["lot"],
                condition=models.Q(status__in=["PENDING", "ACTIVE"]),
                name="unique_open_reservation_per_lot",
            ),
        ]

    def __str__(self):
        return f"RES-{self.pk} {self.lot.code}"

    @property
    def is_open(self):
        return self.status in self.OPEN_STATUSES

    def balance(self):
        return self.amount_due - self.amount_paid


class Payment(models.Model):
    reservation = models.ForeignKey(Reservation, on_delete=models.CASCADE, related_name="payments")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    method = models.CharField(max_length=30, blank=True)
    reference = models.CharField(max_length=100, blank=True)
    is_validated = models.BooleanField(default=False)
    payment_date = models.DateField(auto_now_add=True)

    class Meta:
        ordering = ["-payment_date", "-id"]


class SavedLot(models.Model):
    client = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="saved_lots")
    lot = models.ForeignKey(Lot, on_delete=models.CASCADE, related_name="saved_by")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ["client", "lot"]
        ordering = ["-created_at"]
