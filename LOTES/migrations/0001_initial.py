from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Zone",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(unique=True)),
                ("name", models.CharField(max_length=100)),
                ("zoning_type", models.CharField(max_length=50)),
                ("base_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("lot_size_sqm", models.DecimalField(decimal_places=2, max_digits=8)),
                ("description", models.TextField(blank=True)),
                ("corners", models.JSONField(default=list)),
                ("images", models.JSONField(blank=True, default=list)),
                ("model_3d_url", models.URLField(blank=True)),
                ("camera_orbit", models.CharField(blank=True, max_length=50)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Lot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=80, unique=True)),
                ("label", models.CharField(max_length=10)),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("size_sqm", models.DecimalField(decimal_places=2, max_digits=8)),
                (
                    "status",
                    models.CharField(
                        choices=[("AVAILABLE", "Disponible"), ("RESERVED", "Reservado"), ("SOLD", "Vendido")],
                        default="AVAILABLE",
                        max_length=10,
                    ),
                ),
                ("polygon", models.JSONField(default=list)),
                ("center", models.JSONField(default=list)),
                ("grid_row", models.PositiveSmallIntegerField(default=0)),
                ("grid_col", models.PositiveSmallIntegerField(default=0)),
                ("feature_id", models.PositiveIntegerField(unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "zone",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lots",
                        to="LOTES.zone",
                    ),
                ),
            ],
            options={
                "ordering": ["feature_id"],
            },
        ),
    ]
