"""
Request pipeline stages.

settings.MIDDLEWARE arranges them, together with Django's own middleware, as:

    ExceptionHandlerMiddleware, HstsMiddleware   outside Development only
    SecurityMiddleware                           HTTPS redirection
    StaticFilesMiddleware                        files under WEB_ROOT
    ... sessions, CSRF, authentication ...
    RoutingMiddleware                            records the matched endpoint
    AuthorizationMiddleware                      enforces its policy
    (controller dispatch, see mvc.views)

Each stage answers with a regular HTTP response when it short-circuits.
"""

import logging

from django.conf import settings
from django.core.exceptions import BadRequest, MiddlewareNotUsed, PermissionDenied, SuspiciousOperation
from django.http import Http404, HttpResponse, HttpResponseRedirect
from django.utils.cache import patch_cache_control
from django.views.static import serve

from mvc.views import resolve_endpoint
from pipeline.authorization import AuthorizationResult, get_endpoint_policy
from urlshortener.environment import is_development

exception_logger = logging.getLogger('pipeline.exceptions')
routing_logger = logging.getLogger('pipeline.routing')
authorization_logger = logging.getLogger('pipeline.authorization')

# Exceptions that Django already turns into 4xx responses.
CLIENT_ERRORS = (Http404, PermissionDenied, BadRequest, SuspiciousOperation)


class ExceptionHandlerMiddleware:
    """
    Redirect unhandled view errors to EXCEPTION_HANDLER_PATH.

    Not used in Development, where Django's technical error page is shown
    instead. Errors raised outside of views are covered by
    pipeline.views.server_error.
    """

    def __init__(self, get_response):
        if is_development():
            raise MiddlewareNotUsed('Exception handler is disabled in development')
        self.get_response = get_response
        self.error_path = settings.EXCEPTION_HANDLER_PATH

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, CLIENT_ERRORS):
            return None

        # Failing on the error page itself must not loop.
        if request.path == self.error_path:
            return None

        exception_logger.error('Unhandled exception while serving %s %s', request.method, request.path,
                               exc_info=exception)
        return HttpResponseRedirect(self.error_path)


def hsts_header_value(seconds, include_subdomains=False, preload=False):
    value = 'max-age=%d' % seconds
    if include_subdomains:
        value += '; includeSubDomains'
    if preload:
        value += '; preload'
    return value


class HstsMiddleware:
    def __init__(self, get_response):
        if is_development():
            raise MiddlewareNotUsed('HSTS is disabled in development')
        if not settings.HSTS_SECONDS:
            raise MiddlewareNotUsed('HSTS_SECONDS is not set')
        self.get_response = get_response
        self.header = hsts_header_value(settings.HSTS_SECONDS, settings.HSTS_INCLUDE_SUBDOMAINS, settings.HSTS_PRELOAD)

    def __call__(self, request):
        response = self.get_response(request)
        if 'Strict-Transport-Security' not in response:
            response['Strict-Transport-Security'] = self.header
        return response


class StaticFilesMiddleware:
    """Serve files under WEB_ROOT at the site root before anything else runs."""

    def __init__(self, get_response):
        self.get_response = get_response
        self.document_root = settings.WEB_ROOT
        self.max_age = settings.STATIC_FILES_MAX_AGE

    def __call__(self, request):
        if request.method not in ('GET', 'HEAD') or not self.document_root:
            return self.get_response(request)

        path = request.path_info.lstrip('/')
        if not path:
            return self.get_response(request)

        try:
            response = serve(request, path, document_root=self.document_root)
        except Http404:
            return self.get_response(request)

        patch_cache_control(response, public=True, max_age=self.max_age)
        return response


class RoutingMiddleware:
    """Expose the matched route values and endpoint on the request before any view runs."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.route_values = {}
        request.endpoint = None
        return self.get_response(request)

    def process_view(self, request, view_func, view_args, view_kwargs):
        route_values, action = resolve_endpoint(view_func, view_kwargs)
        if route_values is None:
            request.endpoint = view_func
            routing_logger.debug('%s matched view %s', request.path, getattr(view_func, '__name__', view_func))
            return None

        request.route_values = route_values
        request.endpoint = action
        routing_logger.debug('%s matched %r with %r', request.path, action, route_values)
        return None


class AuthorizationMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_view(self, request, view_func, view_args, view_kwargs):
        endpoint = request.endpoint if hasattr(request, 'endpoint') else view_func
        if endpoint is None and getattr(request, 'route_values', None):
            # No controller action matched, dispatch answers 404.
            return None

        policy = get_endpoint_policy(endpoint)
        if policy is None:
            return None

        result = policy.evaluate(getattr(request, 'user', None))
        if result is AuthorizationResult.SUCCESS:
            return None

        authorization_logger.info('Policy %s rejected %s %s: %s', policy.name, request.method, request.path,
                                  result.value)
        if result is AuthorizationResult.CHALLENGE:
            response = HttpResponse('Authentication required', status=401)
            response['WWW-Authenticate'] = 'Session realm="%s"' % settings.SITE_NAME
            return response
        raise PermissionDenied('Policy %s denied access' % policy.name)
