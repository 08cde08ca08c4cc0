"""
Django settings for urlshortener project.

For more information on this file, see
https://docs.djangoproject.com/en/4.2/topics/settings/

For the full list of settings and their values, see
https://docs.djangoproject.com/en/4.2/ref/settings/
"""

# Build paths inside the project like this: os.path.join(BASE_DIR, ...)
import os

from django_jinja.builtins import DEFAULT_EXTENSIONS
from jinja2 import select_autoescape

from urlshortener.environment import DEVELOPMENT, get_environment

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# One of Development, Staging or Production, read from URLSHORTENER_ENVIRONMENT.
ENVIRONMENT = get_environment()

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get('URLSHORTENER_SECRET_KEY', 'fq5#c7tw0zk@^9xq8$b2o(3l!u1e6v&n4m=hy_j-dr+sia*pg')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = ENVIRONMENT == DEVELOPMENT

ALLOWED_HOSTS = [host.strip() for host in os.environ.get('URLSHORTENER_ALLOWED_HOSTS', '').split(',') if host.strip()]
if DEBUG:
    ALLOWED_HOSTS += ['localhost', '127.0.0.1', '[::1]']

SITE_NAME = 'URL Shortener'

# Path that unhandled errors are redirected to outside of development.
EXCEPTION_HANDLER_PATH = '/Home/Error'

# Strict-Transport-Security, only sent outside of development.
# 30 days; raise it once HTTPS is known to work for every subdomain.
HSTS_SECONDS = 30 * 24 * 60 * 60
HSTS_INCLUDE_SUBDOMAINS = False
HSTS_PRELOAD = False

# Every plaintext request is redirected to HTTPS.
# Set URLSHORTENER_HTTPS_REDIRECT=0 to serve plain HTTP from runserver.
SECURE_SSL_REDIRECT = os.environ.get('URLSHORTENER_HTTPS_REDIRECT', '1') != '0'
SECURE_SSL_HOST = None
SECURE_REDIRECT_EXEMPT = []
# HSTS is emitted by pipeline.middleware.HstsMiddleware instead.
SECURE_HSTS_SECONDS = 0

# Named authorization policies, keyword arguments of pipeline.authorization.AuthorizationPolicy.
AUTHORIZATION_POLICIES = {
    'Staff': {
        'require_staff': True,
    },
}
# Policy applied to endpoints that are neither @authorize nor @allow_anonymous.
AUTHORIZATION_FALLBACK_POLICY = None

# Application definition

INSTALLED_APPS = (
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django_jinja',
    'pipeline',
    'mvc',
    'home',
)

# Order matters, see pipeline.middleware for what each stage does.
MIDDLEWARE = (
    'pipeline.middleware.ExceptionHandlerMiddleware',
    'pipeline.middleware.HstsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'pipeline.middleware.StaticFilesMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'pipeline.middleware.RoutingMiddleware',
    'pipeline.middleware.AuthorizationMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
)

ROOT_URLCONF = 'urlshortener.urls'
WSGI_APPLICATION = 'urlshortener.wsgi.application'
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Routes are case-insensitive and accept an optional trailing slash already.
APPEND_SLASH = False

TEMPLATES = [
    {
        'BACKEND': 'django_jinja.backend.Jinja2',
        'DIRS': [
            os.path.join(BASE_DIR, 'templates'),
        ],
        'APP_DIRS': False,
        'OPTIONS': {
            'match_extension': '.html',
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'urlshortener.template_context.site',
            ],
            'autoescape': select_autoescape(['html', 'xml']),
            'trim_blocks': True,
            'lstrip_blocks': True,
            # Assets live in WEB_ROOT, not in a staticfiles storage.
            'extensions': [ext for ext in DEFAULT_EXTENSIONS if not ext.endswith('.StaticFilesExtension')],
            'globals': {
                'static': 'django.templatetags.static.static',
            },
        },
    },
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'APP_DIRS': True,
        'DIRS': [],
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# Database
# https://docs.djangoproject.com/en/4.2/ref/settings/#databases
# Only sessions and users are stored.

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.path.join(BASE_DIR, 'db.sqlite3'),
    },
}

# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/

LANGUAGE_CODE = 'en'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
# Files under WEB_ROOT are served at the site root, e.g. wwwroot/css/site.css -> /css/site.css.

WEB_ROOT = os.path.join(BASE_DIR, 'wwwroot')
STATIC_URL = '/'
STATIC_FILES_MAX_AGE = 3600

# Authentication

AUTHENTICATION_BACKENDS = (
    'django.contrib.auth.backends.ModelBackend',
)

# Logging

LOG_LEVEL = os.environ.get('URLSHORTENER_LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'loggers': {
        'pipeline': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'mvc': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'django.request': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}

try:
    with open(os.path.join(os.path.dirname(__file__), 'local_settings.py')) as f:
        exec(f.read(), globals())
except IOError:
    pass
