from django.apps import AppConfig


class LotesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "LOTES"
    verbose_name = "Lotes y zonas"
