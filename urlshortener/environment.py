import os

from django.core.exceptions import ImproperlyConfigured

ENVIRONMENT_VARIABLE = 'URLSHORTENER_ENVIRONMENT'

DEVELOPMENT = 'Development'
STAGING = 'Staging'
PRODUCTION = 'Production'

ENVIRONMENTS = (DEVELOPMENT, STAGING, PRODUCTION)
DEFAULT_ENVIRONMENT = PRODUCTION


def get_environment(environ=None):
    """
    Return the canonical environment name from the process environment.

    The value is matched case-insensitively against ENVIRONMENTS. A missing or
    blank value selects DEFAULT_ENVIRONMENT.
    """
    if environ is None:
        environ = os.environ

    value = environ.get(ENVIRONMENT_VARIABLE, '').strip()
    if not value:
        return DEFAULT_ENVIRONMENT

    for name in ENVIRONMENTS:
        if name.lower() == value.lower():
            return name

    raise ImproperlyConfigured('%s must be one of %s, got %r' % (
        ENVIRONMENT_VARIABLE, ', '.join(ENVIRONMENTS), value,
    ))


def _current(name):
    if name is not None:
        return name

    from django.conf import settings
    return getattr(settings, 'ENVIRONMENT', DEFAULT_ENVIRONMENT)


def is_development(name=None):
    return _current(name) == DEVELOPMENT


def is_staging(name=None):
    return _current(name) == STAGING


def is_production(name=None):
    return _current(name) == PRODUCTION
