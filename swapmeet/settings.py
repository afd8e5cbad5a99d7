"""Django settings for the swapmeet project."""

import os
from pathlib import Path

from box import Box

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: str = "false") -> bool:
	return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


ENV = Box(
	{
		"SECRET_KEY": os.getenv("SECRET_KEY", "django-insecure-swapmeet-dev-key"),
		"DEBUG": _env_bool("DEBUG", "true"),
		"ALLOWED_HOSTS": [host for host in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if host],
		"DB_ENGINE": os.getenv("DB_ENGINE", "django.db.backends.sqlite3"),
		"DB_NAME": os.getenv("DB_NAME", str(BASE_DIR / "db.sqlite3")),
		"DB_USER": os.getenv("DB_USER", ""),
		"DB_PASSWORD": os.getenv("DB_PASSWORD", ""),
		"DB_HOST": os.getenv("DB_HOST", ""),
		"DB_PORT": os.getenv("DB_PORT", ""),
		"SEND_SMS_MESSAGES": _env_bool("SEND_SMS_MESSAGES"),
		"CLICKSEND_USERNAME": os.getenv("CLICKSEND_USERNAME", ""),
		"CLICKSEND_API_KEY": os.getenv("CLICKSEND_API_KEY", ""),
		"LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
	},
)

EXCHANGE_SETTINGS = Box(
	{
		"REVIEW_EDIT_WINDOW_HOURS": 24,
		"MIN_REVIEW_COMMENT_LENGTH": 10,
		"MIN_RATING": 1,
		"MAX_RATING": 5,
		"SATISFIED_RATING": 4,
		"REVIEWS_TO_COMPLETE": 2,
		"PROPOSAL_MAX_LENGTH": 500,
		"MESSAGE_MAX_LENGTH": 1000,
		"LATEST_REVIEWS_LIMIT": 5,
	},
)

SECRET_KEY = ENV.SECRET_KEY
DEBUG = ENV.DEBUG
ALLOWED_HOSTS = ENV.ALLOWED_HOSTS

INSTALLED_APPS = [
	"django.contrib.admin",
	"django.contrib.auth",
	"django.contrib.contenttypes",
	"django.contrib.sessions",
	"django.contrib.messages",
	"django.contrib.staticfiles",
	"rest_framework",
	"django_filters",
	"core",
	"listings",
	"exchange",
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

ROOT_URLCONF = "swapmeet.urls"

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

WSGI_APPLICATION = "swapmeet.wsgi.application"

DATABASES = {
	"default": {
		"ENGINE": ENV.DB_ENGINE,
		"NAME": ENV.DB_NAME,
		"USER": ENV.DB_USER,
		"PASSWORD": ENV.DB_PASSWORD,
		"HOST": ENV.DB_HOST,
		"PORT": ENV.DB_PORT,
	},
}

AUTH_USER_MODEL = "core.User"

AUTH_PASSWORD_VALIDATORS = [
	{"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
	{"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
	{"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
	{"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

REST_FRAMEWORK = {
	"DEFAULT_AUTHENTICATION_CLASSES": (
		"rest_framework_simplejwt.authentication.JWTAuthentication",
		"rest_framework.authentication.SessionAuthentication",
	),
	"DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
	"DEFAULT_FILTER_BACKENDS": (
		"django_filters.rest_framework.DjangoFilterBackend",
		"rest_framework.filters.OrderingFilter",
	),
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGGING = {
	"version": 1,
	"disable_existing_loggers": False,
	"formatters": {
		"default": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
	},
	"handlers": {
		"console": {"class": "logging.StreamHandler", "formatter": "default"},
	},
	"loggers": {
		"core": {"handlers": ["console"], "level": ENV.LOG_LEVEL},
		"listings": {"handlers": ["console"], "level": ENV.LOG_LEVEL},
		"exchange": {"handlers": ["console"], "level": ENV.LOG_LEVEL},
	},
}
