from dotenv import load_dotenv
load_dotenv()
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

DEBUG = os.getenv('DEBUG', 'False') == 'True'
SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-mindlyst-dev-key-change-me')
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')

INSTALLED_APPS = [
    'corsheaders',
    'daphne',
    'rest_framework',
    'channels',
    'storage',
    'authentication',
    'contacts',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'mindlyst.urls'

ASGI_APPLICATION = 'mindlyst.asgi.application'

# Channel layer for contact notifications; Redis when configured, in-process otherwise
REDIS_URL = os.getenv('REDIS_URL')
if REDIS_URL:
    CHANNEL_LAYERS = {
        'default': {
            'BACKEND': 'channels_redis.core.RedisChannelLayer',
            'CONFIG': {
                'hosts': [REDIS_URL],
                'capacity': 1500,
                'expiry': 10,
            },
        },
    }
else:
    CHANNEL_LAYERS = {
        'default': {
            'BACKEND': 'channels.layers.InMemoryChannelLayer',
        },
    }

# All application state lives in JSON documents under MINDLYST_DATA_DIR
DATABASES = {}
MINDLYST_DATA_DIR = os.getenv('MINDLYST_DATA_DIR', str(BASE_DIR / 'data'))

MINDLYST_SESSION_COOKIE = os.getenv('MINDLYST_SESSION_COOKIE', 'mindlyst_session')
MINDLYST_SESSION_MAX_AGE = int(os.getenv('MINDLYST_SESSION_MAX_AGE', str(7 * 24 * 60 * 60)))
MINDLYST_SEARCH_LIMIT = int(os.getenv('MINDLYST_SEARCH_LIMIT', '10'))

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'authentication.backends.SessionTokenAuthentication',
    ),
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
    ),
    'DEFAULT_PARSER_CLASSES': (
        'rest_framework.parsers.JSONParser',
    ),
    'UNAUTHENTICATED_USER': None,
}

CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOW_CREDENTIALS = True
FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:3000').split(',')
CORS_ALLOWED_ORIGINS = FRONTEND_URL
CORS_ALLOW_METHODS = ['GET', 'POST', 'DELETE', 'OPTIONS']
CORS_ALLOW_HEADERS = [
    'content-type',
    'accept',
    'origin',
]

LANGUAGE_CODE = 'fr-fr'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

SECURE_SSL_REDIRECT = False

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'loggers': {
        '': {
            'handlers': ['console'],
            'level': 'DEBUG' if DEBUG else 'INFO',
        },
    },
}
