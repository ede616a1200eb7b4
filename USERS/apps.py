from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "USERS"
    verbose_name = "Usuarios y documentos"
