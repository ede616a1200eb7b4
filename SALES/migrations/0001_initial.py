from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("LOTES", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(
                    choices=[
                        ("PENDING", "Pendiente"),
                        ("ACTIVE", "Activa"),
                        ("COMPLETED", "Completada"),
                        ("CANCELLED", "Cancelada"),
                        ("EXPIRED", "Vencida"),
                    ],
                    default="PENDING",
                    max_length=10,
                )),
                ("amount_due", models.DecimalField(decimal_places=2, max_digits=12)),
                ("amount_paid", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("reservation_fee", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("payment_plan", models.CharField(blank=True, max_length=20)),
                ("next_payment_due", models.DateField(blank=True, null=True)),
                ("expiry_date", models.DateTimeField(blank=True, null=True)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("client", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="reservations",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("lot", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="reservations",
                    to="LOTES.lot",
                )),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.AddConstraint(
            model_name="reservation",
            constraint=models.UniqueConstraint(
                condition=models.Q(status__in=["PENDING", "ACTIVE"]),
                fields=("lot",),
                name="unique_open_reservation_per_lot",
            ),
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("method", models.CharField(blank=True, max_length=30)),
                ("reference", models.CharField(blank=True, max_length=100)),
                ("is_validated", models.BooleanField(default=False)),
                ("payment_date", models.DateField(auto_now_add=True)),
                ("reservation", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="payments",
                    to="SALES.reservation",
                )),
            ],
            options={"ordering": ["-payment_date", "-id"]},
        ),
        migrations.CreateModel(
            name="SavedLot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("client", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="saved_lots",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("lot", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="saved_by",
                    to="LOTES.lot",
                )),
            ],
            options={"ordering": ["-created_at"], "unique_together": {("client", "lot")}},
        ),
    ]
