# settings.py
import os
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

# ───────────────────────── Base ─────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

def env(name, default=None, required=False):
    """env lookup with optional 'required'"""
    v = os.environ.get(name, default)
    if required and (v is None or str(v).strip() == ""):
        raise ImproperlyConfigured(f"Missing env: {name}")
    return v

def env_bool(name, default="false"):
    return str(env(name, default)).lower() in {"1", "true", "yes"}

def env_list(name, default=""):
    """comma separated, blanks ignored"""
    raw = env(name, default=default) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]

# ───────────────────────── Mode (dev/prod) ─────────────────────────
# DEV by default; set DJANGO_DEBUG=false in prod.
DEBUG = env_bool("DJANGO_DEBUG", "true")

# ───────────────────────── Secret key ─────────────────────────
# dev: default value; prod: REQUIRED
SECRET_KEY = env("DJANGO_SECRET_KEY", default="dev-secret", required=not DEBUG)

# ───────────────────────── Hosts ─────────────────────────
ALLOWED_HOSTS = env_list(
    "DJANGO_ALLOWED_HOSTS",
    "localhost,127.0.0.1,0.0.0.0,testserver" if DEBUG else "",
)

# ───────────────────────── Apps ─────────────────────────
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "corsheaders",
    "api",
]

AUTH_USER_MODEL = "api.User"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ───────────────────────── Middleware ─────────────────────────
MIDDLEWARE = [
    "culinary_notes.middleware.OperationIdMiddleware",  # first: tags every log line
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "corsheaders.middleware.CorsMiddleware",            # CORS before CommonMiddleware
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "culinary_notes.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

WSGI_APPLICATION = "culinary_notes.wsgi.application"

# ───────────────────────── Database ─────────────────────────
# PostgreSQL when POSTGRES_DB is set, SQLite file otherwise (dev / tests).
DB_NAME = env("POSTGRES_DB")

if DB_NAME:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": DB_NAME,
            "USER": env("POSTGRES_USER", required=True),
            "PASSWORD": env("POSTGRES_PASSWORD", required=True),
            "HOST": env("POSTGRES_HOST", default="db"),
            "PORT": env("POSTGRES_PORT", default="5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

# ───────────────────────── File uploads ─────────────────────────
FILE_UPLOAD_DIR = Path(env("FILE_UPLOAD_DIR", default=str(BASE_DIR / "uploads")))

# ───────────────────────── DRF ─────────────────────────
# No authentication in this API: every endpoint is public.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.exception_handler",
}

# ───────────────────────── Logging ─────────────────────────
LOG_LEVEL = env("LOG_LEVEL", default="DEBUG" if DEBUG else "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "operation_id": {"()": "culinary_notes.middleware.OperationIdFilter"},
    },
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s [%(operation_id)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "filters": ["operation_id"],
            "formatter": "default",
        },
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "api": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "culinary_notes": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django.request": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}

# ───────────────────────── Static / WhiteNoise ─────────────────────────
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"
        if not DEBUG else "whitenoise.storage.CompressedStaticFilesStorage",
    },
}

# ───────────────────────── HTTPS/Proxy ─────────────────────────
# TLS terminates at the reverse proxy; no redirect here to avoid loops
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = False

SESSION_COOKIE_SECURE = not DEBUG
CSRF_COOKIE_SECURE   = not DEBUG

# ───────────── CORS / CSRF ─────────────
if DEBUG:
    CORS_ALLOWED_ORIGINS = env_list(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    )
else:
    CORS_ALLOWED_ORIGINS = env_list("CORS_ALLOWED_ORIGINS")
CSRF_TRUSTED_ORIGINS = env_list("CSRF_TRUSTED_ORIGINS", ",".join(CORS_ALLOWED_ORIGINS))

USE_TZ = True
TIME_ZONE = env("TIME_ZONE", default="UTC")
