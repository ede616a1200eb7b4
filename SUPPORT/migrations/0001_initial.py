from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("LOTES", "0001_initial"),
        ("SALES", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SupportTicket",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("category", models.CharField(
                    choices=[
                        ("PAYMENT", "Pagos"),
                        ("RESERVATION", "Reservas"),
                        ("DOCUMENTS", "Documentos"),
                        ("MAP", "Mapa / Técnico"),
                        ("ACCOUNT", "Cuenta"),
                        ("LOT_INFO", "Información de lote"),
                        ("OTHER", "Otro"),
                    ],
                    default="OTHER",
                    max_length=20,
                )),
                ("priority", models.CharField(
                    choices=[("NORMAL", "Normal"), ("URGENT", "Urgente")], default="NORMAL", max_length=10
                )),
                ("subject", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("status", models.CharField(
                    choices=[
                        ("OPEN", "Abierto"),
                        ("WAITING_ON_USER", "Esperando al cliente"),
                        ("WAITING_ON_SUPPORT", "Esperando a soporte"),
                        ("RESOLVED", "Resuelto"),
                        ("CLOSED", "Cerrado"),
                    ],
                    default="OPEN",
                    max_length=20,
                )),
                ("preferred_contact", models.CharField(
                    choices=[("email", "Correo"), ("phone", "Teléfono"), ("whatsapp", "WhatsApp")],
                    default="email",
                    max_length=10,
                )),
                ("best_time", models.CharField(
                    choices=[("morning", "Mañana (8-12)"), ("afternoon", "Tarde (12-17)"), ("evening", "Noche (17-20)")],
                    default="morning",
                    max_length=10,
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("client", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="tickets",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("lot", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="tickets",
                    to="LOTES.lot",
                )),
                ("reservation", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="tickets",
                    to="SALES.reservation",
                )),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="TicketMessage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("message", models.TextField()),
                ("is_admin", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("sender", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    to=settings.AUTH_USER_MODEL,
                )),
                ("ticket", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="messages",
                    to="SUPPORT.supportticket",
                )),
            ],
            options={"ordering": ["created_at"]},
        ),
    ]
