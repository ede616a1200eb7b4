"""
Django settings for the Santo Tomás Nuevo sales portal.

Values come from environment variables; a .env file at the project root is
loaded first so local development does not need exported variables.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def env_int(name, default):
    value = os.environ.get(name)
    return int(value) if value else default


def env_float(name, default):
    value = os.environ.get(name)
    return float(value) if value else default


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-santo-tomas-dev-key")

DEBUG = env_bool("DJANGO_DEBUG", True)

ALLOWED_HOSTS = [h for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h]


INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "USERS",
    "LOTES",
    "SALES",
    "SUPPORT",
    "DASHBOARD",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "PORTAL.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "PORTAL.wsgi.application"


DB_ENGINE = os.environ.get("DB_ENGINE", "sqlite")

if DB_ENGINE == "postgres":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ.get("DB_NAME", "santo_tomas"),
            "USER": os.environ.get("DB_USER", ""),
            "PASSWORD": os.environ.get("DB_PASSWORD", ""),
            "HOST": os.environ.get("DB_HOST", "localhost"),
            "PORT": os.environ.get("DB_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.environ.get("DB_NAME", str(BASE_DIR / "db.sqlite3")),
        }
    }


AUTH_USER_MODEL = "USERS.User"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LOGIN_URL = "login"
LOGIN_REDIRECT_URL = "dashboard"
LOGOUT_REDIRECT_URL = "lot_map"

LANGUAGE_CODE = "es"
TIME_ZONE = os.environ.get("TIME_ZONE", "America/Tijuana")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / "media"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "ventas@santotomasnuevo.mx")
MJ_APIKEY_PUBLIC = os.environ.get("MJ_APIKEY_PUBLIC", "")
MJ_APIKEY_PRIVATE = os.environ.get("MJ_APIKEY_PRIVATE", "")


# Map
MAPBOX_TOKEN = os.environ.get("MAPBOX_TOKEN", "")
MAPBOX_TILESET = os.environ.get("MAPBOX_TILESET", "")
MAP_LOT_ZOOM = env_float("MAP_LOT_ZOOM", 19)
MAP_ZONE_ZOOM = env_float("MAP_ZONE_ZOOM", 18.2)
MAP_LOT_FLY_MS = env_int("MAP_LOT_FLY_MS", 1200)
MAP_ZONE_FLY_MS = env_int("MAP_ZONE_FLY_MS", 1400)


# Reservations
RESERVATION_FEE = env_int("RESERVATION_FEE", 5000)
NEXT_PAYMENT_OFFSET_DAYS = env_int("NEXT_PAYMENT_OFFSET_DAYS", 15)
RESERVATION_EXPIRY_DAYS = env_int("RESERVATION_EXPIRY_DAYS", 30)
RESERVATION_REQUIRES_APPROVAL = env_bool("RESERVATION_REQUIRES_APPROVAL", False)


# Documents
DOCUMENT_MAX_BYTES = env_int("DOCUMENT_MAX_BYTES", 10 * 1024 * 1024)
DOCUMENT_EXTENSIONS = [
    ext.strip().lower()
    for ext in os.environ.get("DOCUMENT_EXTENSIONS", "pdf,jpg,jpeg,png").split(",")
    if ext.strip()
]
REQUIRED_DOCUMENT_TYPES = [
    "government_id",
    "proof_of_address",
    "tax_id",
    "proof_of_funds",
    "signed_reservation",
    "purchase_agreement",
]


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {
        "handlers": ["console"],
        "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO"),
    },
}
