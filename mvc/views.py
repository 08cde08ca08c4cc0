import logging

from django.http import Http404, HttpResponseNotAllowed
from django.views import View

from mvc.controllers import ActionDescriptor, registry as default_registry

logger = logging.getLogger('mvc.dispatch')

ROUTE_KEYS = ('controller', 'action')


def resolve_endpoint(view_func, view_kwargs):
    """
    Return ``(route_values, action)`` for a view created by map_controller_route.

    ``route_values`` has every route parameter with defaults applied and
    ``action`` is the matching ActionDescriptor, or None when no controller
    action matches. Returns ``(None, None)`` for any other view.
    """
    initkwargs = getattr(view_func, 'view_initkwargs', None)
    view_class = getattr(view_func, 'view_class', None)
    if not initkwargs or view_class is None or not issubclass(view_class, ControllerDispatchView):
        return None, None

    route_pattern = initkwargs['route_pattern']
    registry = initkwargs.get('registry') or default_registry
    values = route_pattern.fill_defaults(view_kwargs)
    return values, registry.get_action(values.get('controller'), values.get('action'))


class ControllerDispatchView(View):
    route_pattern = None
    registry = None

    def get_registry(self):
        return default_registry if self.registry is None else self.registry

    def dispatch(self, request, *args, **kwargs):
        values = self.route_pattern.fill_defaults(kwargs)

        # RoutingMiddleware has usually resolved the endpoint already.
        action = getattr(request, 'endpoint', None)
        if not isinstance(action, ActionDescriptor):
            action = self.get_registry().get_action(values.get('controller'), values.get('action'))
        if action is None:
            logger.debug('No action for %s/%s', values.get('controller'), values.get('action'))
            raise Http404('No action matches %s/%s' % (values.get('controller'), values.get('action')))

        if request.method not in action.http_methods:
            return HttpResponseNotAllowed(sorted(action.http_methods))

        controller = action.controller_class(request, route_values=values, route_pattern=self.route_pattern)
        controller.action_name = action.name

        arguments = {
            name: value for name, value in values.items()
            if name not in ROUTE_KEYS and value is not None and action.accepts(name)
        }
        logger.debug('Dispatching %s.%s%s', action.controller_name, action.name,
                     ' with %r' % arguments if arguments else '')
        return getattr(controller, action.method_name)(**arguments)
