"""Django settings for toll planner project."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
PROJECT_ROOT = BASE_DIR.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "change-me-in-production")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = [host for host in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if host]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "toll_planner",
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

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
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

WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": PROJECT_ROOT / "db.sqlite3",
    }
}

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "Asia/Kolkata"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "toll-planner-cache",
    }
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "toll_planner": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}

OSRM_BASE_URL = os.getenv("OSRM_BASE_URL", "https://router.project-osrm.org")
OSRM_PROFILE = os.getenv("OSRM_PROFILE", "driving")
OSRM_TIMEOUT_SECONDS = float(os.getenv("OSRM_TIMEOUT_SECONDS", "12"))
OSRM_RETRY_COUNT = int(os.getenv("OSRM_RETRY_COUNT", "2"))

GEOCODING_BASE_URL = os.getenv("GEOCODING_BASE_URL", "https://nominatim.openstreetmap.org")
GEOCODING_USER_AGENT = os.getenv("GEOCODING_USER_AGENT", "karnataka-toll-planner/1.0")
GEOCODING_COUNTRY_CODE = os.getenv("GEOCODING_COUNTRY_CODE", "in")
# Appended to free-text queries; the viewbox (lon1,lat1,lon2,lat2) biases results
GEOCODING_REGION = os.getenv("GEOCODING_REGION", "Karnataka, India")
GEOCODING_VIEWBOX = os.getenv("GEOCODING_VIEWBOX", "74.0,18.5,78.6,11.5")
GEOCODING_TIMEOUT_SECONDS = float(os.getenv("GEOCODING_TIMEOUT_SECONDS", "12"))
GEOCODING_RETRY_COUNT = int(os.getenv("GEOCODING_RETRY_COUNT", "2"))

ROUTE_CACHE_TTL_SECONDS = int(os.getenv("ROUTE_CACHE_TTL_SECONDS", "600"))
GEOCODE_CACHE_TTL_SECONDS = int(os.getenv("GEOCODE_CACHE_TTL_SECONDS", "86400"))

TOLL_PROXIMITY_RADIUS_METERS = float(os.getenv("TOLL_PROXIMITY_RADIUS_METERS", "250"))
TOLL_SAMPLING_STRIDE = int(os.getenv("TOLL_SAMPLING_STRIDE", "5"))
TOLL_EXCLUSION_VEHICLE_CLASSES = [
    value.strip().lower()
    for value in os.getenv("TOLL_EXCLUSION_VEHICLE_CLASSES", "car,truck").split(",")
    if value.strip()
]

FUEL_ECONOMY_KM_PER_UNIT = float(os.getenv("FUEL_ECONOMY_KM_PER_UNIT", "15"))
FUEL_PRICE_PER_UNIT = float(os.getenv("FUEL_PRICE_PER_UNIT", "105"))
FUEL_COST_PRECISION = int(os.getenv("FUEL_COST_PRECISION", "0"))

# Per vehicle class overrides, e.g. FUEL_ECONOMY_KM_PER_UNIT_BIKE=45
FUEL_PARAMS_BY_VEHICLE_CLASS = {
    vehicle_class: {
        "economy_km_per_unit": float(
            os.getenv(f"FUEL_ECONOMY_KM_PER_UNIT_{vehicle_class.upper()}", FUEL_ECONOMY_KM_PER_UNIT)
        ),
        "price_per_unit": float(
            os.getenv(f"FUEL_PRICE_PER_UNIT_{vehicle_class.upper()}", FUEL_PRICE_PER_UNIT)
        ),
    }
    for vehicle_class in ("car", "bike", "truck")
}
