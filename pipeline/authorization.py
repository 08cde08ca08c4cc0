"""
Authorization policies for controller actions and views.

Mark an endpoint with ``@authorize`` to require a policy, or with
``@allow_anonymous`` to exempt it from every policy:

    @authorize('Staff')
    class ReportsController(Controller):
        def index(self):
            ...

        @allow_anonymous
        def about(self):
            ...

A marker on an action overrides one on its controller. Endpoints without any
marker use ``settings.AUTHORIZATION_FALLBACK_POLICY`` when it is set and are
open otherwise.
"""

import enum

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULT_POLICY = 'default'

POLICY_ATTR = 'authorization_policy'
ANONYMOUS_ATTR = 'allow_anonymous'


class AuthorizationResult(enum.Enum):
    SUCCESS = 'success'
    # No authenticated user, the client should authenticate and retry.
    CHALLENGE = 'challenge'
    # Authenticated, but not allowed.
    FORBID = 'forbid'


class AuthorizationPolicy:
    def __init__(self, name, require_authenticated=True, permissions=(), require_staff=False):
        self.name = name
        self.require_authenticated = require_authenticated or require_staff or bool(permissions)
        self.permissions = tuple(permissions)
        self.require_staff = require_staff

    def __repr__(self):
        return '<AuthorizationPolicy %s>' % self.name

    def evaluate(self, user):
        if not self.require_authenticated:
            return AuthorizationResult.SUCCESS

        if user is None or not user.is_authenticated:
            return AuthorizationResult.CHALLENGE

        if not user.is_active:
            return AuthorizationResult.FORBID
        if self.require_staff and not user.is_staff:
            return AuthorizationResult.FORBID
        if self.permissions and not user.has_perms(self.permissions):
            return AuthorizationResult.FORBID
        return AuthorizationResult.SUCCESS


def get_policy(name=None):
    """Look up a named policy from settings.AUTHORIZATION_POLICIES."""
    if name is None or name == DEFAULT_POLICY:
        return AuthorizationPolicy(DEFAULT_POLICY)

    try:
        options = settings.AUTHORIZATION_POLICIES[name]
    except KeyError:
        raise ImproperlyConfigured('Unknown authorization policy %r' % name)
    return AuthorizationPolicy(name, **options)


def authorize(policy=None):
    """Require ``policy`` (a policy name) for a controller class, action or view."""
    if callable(policy):
        # Used bare, as @authorize.
        return authorize()(policy)

    def decorator(target):
        setattr(target, POLICY_ATTR, policy or DEFAULT_POLICY)
        setattr(target, ANONYMOUS_ATTR, False)
        return target
    return decorator


def allow_anonymous(target):
    setattr(target, ANONYMOUS_ATTR, True)
    return target


def get_endpoint_policy(endpoint):
    """
    Return the AuthorizationPolicy for an endpoint, or None if it is open.

    ``endpoint`` is an mvc ActionDescriptor or a plain view function.
    """
    if endpoint is None:
        lookup = lambda name: None  # noqa: E731
    elif hasattr(endpoint, 'get_metadata'):
        lookup = endpoint.get_metadata
    else:
        lookup = lambda name: getattr(endpoint, name, None)  # noqa: E731

    if lookup(ANONYMOUS_ATTR):
        return None

    name = lookup(POLICY_ATTR)
    if name is None:
        name = settings.AUTHORIZATION_FALLBACK_POLICY
        if name is None:
            return None
    return get_policy(name)
