from pathlib import Path

import os
from django.core.exceptions import ImproperlyConfigured

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


def get_env(setting, default=None, required=False):
    """
    Reads a setting from the process environment.

    Secrets and deployment-specific values are never committed; they are injected through
    environment variables. A required setting that is missing stops the process at startup with
    `ImproperlyConfigured`, so a misconfigured deployment fails before serving any request.
    """
    value = os.environ.get(setting, default)
    if required and not value:
        raise ImproperlyConfigured("Set the {} environment variable".format(setting))
    return value


def get_env_bool(setting, default=False):
    return str(get_env(setting, str(default))).strip().lower() in ('1', 'true', 'yes', 'on')


def get_env_list(setting, default=''):
    return [item.strip() for item in get_env(setting, default).split(',') if item.strip()]


# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = get_env_bool('DJANGO_DEBUG', True)

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = get_env(
    'DJANGO_SECRET_KEY',
    default='django-insecure-local-development-key' if DEBUG else None,
    required=not DEBUG,
)

ALLOWED_HOSTS = get_env_list('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver')


# Application definition

DJANGO_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

THIRD_PARTY_APPS = [
    'corsheaders',
    'rest_framework',
    'rest_framework.authtoken',
    'django_filters',
]

PROJECT_APPS = [
    'user_auth_app',
    'establishments_app',
    'reviews_app',
    'places_app',
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + PROJECT_APPS

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'core.middleware.PayloadSizeLimitMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'core.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'core.wsgi.application'


# Database
# SQLite is used unless a DB_ENGINE (e.g. django.db.backends.postgresql) is provided.

if get_env('DB_ENGINE'):
    DATABASES = {
        'default': {
            'ENGINE': get_env('DB_ENGINE'),
            'NAME': get_env('DB_NAME', required=True),
            'USER': get_env('DB_USER', ''),
            'PASSWORD': get_env('DB_PASSWORD', ''),
            'HOST': get_env('DB_HOST', 'localhost'),
            'PORT': get_env('DB_PORT', ''),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }


# Password validation

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
        'OPTIONS': {'min_length': 6},
    },
]

AUTH_USER_MODEL = 'user_auth_app.User'


# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


# Static files (CSS, JavaScript, Images)

STATIC_URL = 'static/'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Requests whose body is larger than this are rejected with 413 Payload Too Large.
DATA_UPLOAD_MAX_MEMORY_SIZE = int(get_env('DATA_UPLOAD_MAX_MEMORY_SIZE', 5 * 1024 * 1024))


# CORS

CORS_ALLOW_CREDENTIALS = True

CORS_ALLOWED_ORIGINS = get_env_list(
    'CORS_ALLOWED_ORIGINS',
    'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173',
)


# Django REST Framework

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'user_auth_app.authentication.BearerTokenAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticatedOrReadOnly',
    ],
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
    ],
    'EXCEPTION_HANDLER': 'core.exception_handler.api_exception_handler',
}


# Geo providers
# GEO_PROVIDER selects the upstream mapping service: 'google', 'google_new' or 'mapbox'.
# Missing credentials do not prevent startup; the first call that needs them fails.

GEO_PROVIDER = get_env('GEO_PROVIDER', 'google')

GOOGLE_MAPS_API_KEY = get_env('GOOGLE_MAPS_API_KEY', '')

MAPBOX_ACCESS_TOKEN = get_env('MAPBOX_ACCESS_TOKEN', '')

GEO_PROVIDER_TIMEOUT = float(get_env('GEO_PROVIDER_TIMEOUT', 5))

GEO_PROVIDER_LANGUAGE = get_env('GEO_PROVIDER_LANGUAGE', 'pt-BR')

GEO_PROVIDER_REGION = get_env('GEO_PROVIDER_REGION', 'br')


# Logging

LOG_LEVEL = get_env('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'core': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'user_auth_app': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'establishments_app': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'reviews_app': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'places_app': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}
