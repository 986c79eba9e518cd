# settings.py
import os
from datetime import timedelta
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

# ───────────────────────── Base ─────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

def env(name, default=None, required=False):
    """petit helper env avec 'required' optionnel"""
    v = os.environ.get(name, default)
    if required and (v is None or str(v).strip() == ""):
        raise ImproperlyConfigured(f"Missing env: {name}")
    return v

def env_list(name, default=""):
    """split par virgules, espaces ignorés"""
    raw = env(name, default=default) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]

def env_bool(name, default="false"):
    return str(env(name, default)).lower() in {"1", "true", "yes"}

def env_int(name, default):
    raw = env(name, None)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ImproperlyConfigured(f"Invalid integer for env {name}: {raw!r}")

# ───────────────────────── Mode (dev/prod) ─────────────────────────
# Par défaut on se comporte comme DEV (True), et on met DJANGO_DEBUG=false en prod.
DEBUG = env_bool("DJANGO_DEBUG", "true")

# ───────────────────────── Secret key ─────────────────────────
# En dev : valeur par défaut; en prod : OBLIGATOIRE
SECRET_KEY = env("DJANGO_SECRET_KEY", default="dev-secret", required=not DEBUG)

# ───────────────────────── Hôtes ─────────────────────────
if DEBUG:
    ALLOWED_HOSTS = list(set(
        env_list("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,0.0.0.0,testserver")
    ))
else:
    ALLOWED_HOSTS = list(set(
        env_list("DJANGO_ALLOWED_HOSTS", "journal.mon-site.ca,api.journal.mon-site.ca")
    ))

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

# ───────────────────────── Middleware ─────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "corsheaders.middleware.CorsMiddleware",            # CORS avant Session
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# (optionnel) journal des requêtes /api/* quand DIARY_LOG_REQUESTS=true
DIARY_LOG_REQUESTS = env_bool("DIARY_LOG_REQUESTS", "false")
if DIARY_LOG_REQUESTS:
    MIDDLEWARE.insert(3, "journal_intime.middleware.RequestLogMiddleware")

ROOT_URLCONF = "journal_intime.urls"

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

WSGI_APPLICATION = "journal_intime.wsgi.application"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = env("DJANGO_TIME_ZONE", default="UTC")

# ───────────────────────── Base de données ─────────────────────────
# PostgreSQL si POSTGRES_DB est défini, sinon SQLite locale (dev / tests)
DB_NAME = env("POSTGRES_DB")

if DB_NAME:
    DB_USER = env("POSTGRES_USER", required=True)
    DB_PASS = env("POSTGRES_PASSWORD", required=True)
    DB_HOST = env("POSTGRES_HOST", default="db")
    DB_PORT = env("POSTGRES_PORT", default="5432")

    DATABASE_URL = f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"

    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": DB_NAME,
            "USER": DB_USER,
            "PASSWORD": DB_PASS,
            "HOST": DB_HOST,
            "PORT": DB_PORT,
        }
    }
else:
    SQLITE_PATH = Path(env("DIARY_SQLITE_PATH", default=str(BASE_DIR / "db.sqlite3")))
    DATABASE_URL = f"sqlite:///{SQLITE_PATH}"

    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": SQLITE_PATH,
        }
    }

# ───────────────────────── Mots de passe ─────────────────────────
# Le hasher sha256 vérifie les comptes importés (empreinte SHA-256 hex non salée);
# Django les re-hache en PBKDF2 à la première connexion réussie.
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.PBKDF2PasswordHasher",
    "django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher",
    "django.contrib.auth.hashers.Argon2PasswordHasher",
    "django.contrib.auth.hashers.BCryptSHA256PasswordHasher",
    "django.contrib.auth.hashers.ScryptPasswordHasher",
    "api.hashers.SHA256PasswordHasher",
]

# ───────────────────────── DRF ─────────────────────────
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "api.authentication.SessionTokenAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "api.parsers.DiaryJSONParser",
    ],
    "EXCEPTION_HANDLER": "api.exceptions.diary_exception_handler",
}

# ───────────────────────── Journal ─────────────────────────
DIARY_SESSION_HEADER = "X-Session-Token"
DIARY_SESSION_TTL = timedelta(days=env_int("DIARY_SESSION_TTL_DAYS", 7))
# taille max d'un média décodé (une ligne = un fichier)
DIARY_MEDIA_MAX_BYTES = env_int("DIARY_MEDIA_MAX_BYTES", 5 * 1024 * 1024)
# plafond du corps de requête; au-delà le client envoie les médias un par un
DATA_UPLOAD_MAX_MEMORY_SIZE = env_int("DIARY_MAX_REQUEST_BYTES", 10 * 1024 * 1024)
# lecture publique (comportement historique) ou limitée au propriétaire
DIARY_PRIVATE_READS = env_bool("DIARY_PRIVATE_READS", "false")

# ───────────────────────── Logging ─────────────────────────
LOG_LEVEL = str(env("DJANGO_LOG_LEVEL", "INFO")).upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "api": {"level": LOG_LEVEL},
        "journal_intime": {"level": LOG_LEVEL},
        "django.request": {"handlers": ["console"], "level": "ERROR", "propagate": False},
    },
}

# ───────────────────────── Debug: affiche la DB courante ─────────────────────────
if DEBUG and DB_NAME:
    safe_url = DATABASE_URL.replace(DB_PASS, "********") if DB_PASS else DATABASE_URL
    print(f"[DEBUG] DATABASE_URL = {safe_url}")


# ───────────────────────── Statique / WhiteNoise ─────────────────────────
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

if not DEBUG:
    STATICFILES_STORAGE_BACKEND = "whitenoise.storage.CompressedManifestStaticFilesStorage"
else:
    STATICFILES_STORAGE_BACKEND = "whitenoise.storage.CompressedStaticFilesStorage"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": STATICFILES_STORAGE_BACKEND},
}


# ───────────────────────── HTTPS/Proxy ─────────────────────────
# Apache/Nginx gère TLS; on évite la redirection ici pour ne pas boucler
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = False

# ───────────────────────── Cookies (admin) ─────────────────────────
SESSION_COOKIE_SECURE = not DEBUG
CSRF_COOKIE_SECURE   = not DEBUG
SESSION_COOKIE_SAMESITE = "Lax"
CSRF_COOKIE_SAMESITE    = "Lax"

# ───────────── CORS / CSRF ─────────────
# L'API s'authentifie par en-tête X-Session-Token, pas par cookie
from corsheaders.defaults import default_headers

CORS_ALLOW_HEADERS = [*default_headers, "x-session-token"]

if DEBUG:
    # Vite (5173) et front nginx (8080) en dev
    CORS_ALLOWED_ORIGINS = env_list(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8080,http://127.0.0.1:8080",
    )
    CSRF_TRUSTED_ORIGINS = env_list(
        "CSRF_TRUSTED_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    )
else:
    CORS_ALLOWED_ORIGINS = env_list("CORS_ALLOWED_ORIGINS", "https://journal.mon-site.ca")
    CSRF_TRUSTED_ORIGINS = env_list("CSRF_TRUSTED_ORIGINS", "https://journal.mon-site.ca")
