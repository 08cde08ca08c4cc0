from django.conf import settings
from django.http import HttpResponseRedirect, HttpResponseServerError

from urlshortener.environment import is_development


def server_error(request):
    """
    handler500 for errors that never reached ExceptionHandlerMiddleware.

    Only used when DEBUG is off. Redirects to the error page unless the error
    page itself is failing.
    """
    if not is_development() and request.path != settings.EXCEPTION_HANDLER_PATH:
        return HttpResponseRedirect(settings.EXCEPTION_HANDLER_PATH)
    return HttpResponseServerError('<h1>Server Error (500)</h1>', content_type='text/html')
