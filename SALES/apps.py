from django.apps import AppConfig


class SalesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "SALES"

    def ready(self):
        from . import signals  # noqa: F401
