import inspect

from django.core.exceptions import ImproperlyConfigured
from django.http import Http404, HttpResponseRedirect
from django.shortcuts import render

DEFAULT_HTTP_METHODS = frozenset(('GET', 'HEAD', 'POST'))


def controller_name_for(cls):
    name = cls.__name__
    if name.endswith('Controller') and name != 'Controller':
        name = name[:-len('Controller')]
    return name


def action_name_for(method_name):
    return ''.join(part[:1].upper() + part[1:] for part in method_name.split('_') if part)


def normalize(name):
    return name.replace('_', '').lower()


def http_methods(*methods):
    """Restrict an action to the given HTTP methods."""
    allowed = frozenset(method.upper() for method in methods)
    if 'GET' in allowed:
        allowed |= {'HEAD'}

    def decorator(func):
        func.http_methods = allowed
        return func
    return decorator


http_get = http_methods('GET')
http_post = http_methods('POST')


def non_action(func):
    func.non_action = True
    return func


class Controller:
    """
    Base class for controllers dispatched by the default route.

    Every public method defined on a subclass is an action. A new instance is
    created for each request.
    """
    name = None

    def __init__(self, request, route_values=None, route_pattern=None):
        self.request = request
        self.route_values = route_values or {}
        self.route_pattern = route_pattern
        self.action_name = self.route_values.get('action')

    @property
    def controller_name(self):
        return self.name or controller_name_for(type(self))

    def get_template_name(self):
        return '%s/%s.html' % (self.controller_name.lower(), (self.action_name or '').lower())

    def view(self, template_name=None, context=None, status=200):
        return render(self.request, template_name or self.get_template_name(), context, status=status)

    def url_for_action(self, action, controller=None, id=None):
        controller = controller or self.controller_name
        if self.route_pattern is not None:
            return self.route_pattern.reverse(controller=controller, action=action, id=id)
        if id is None:
            return '/%s/%s' % (controller, action)
        return '/%s/%s/%s' % (controller, action, id)

    def redirect_to_action(self, action, controller=None, id=None):
        return HttpResponseRedirect(self.url_for_action(action, controller, id))

    def not_found(self, message=''):
        raise Http404(message)


class ActionDescriptor:
    __slots__ = ('controller_class', 'controller_name', 'name', 'method_name', 'http_methods', 'parameters',
                 'accepts_any')

    def __init__(self, controller_class, controller_name, method_name, func):
        self.controller_class = controller_class
        self.controller_name = controller_name
        self.name = action_name_for(method_name)
        self.method_name = method_name
        self.http_methods = getattr(func, 'http_methods', DEFAULT_HTTP_METHODS)

        signature = inspect.signature(func)
        self.parameters = frozenset(name for name in signature.parameters if name != 'self')
        self.accepts_any = any(param.kind == param.VAR_KEYWORD for param in signature.parameters.values())

    def __repr__(self):
        return '<ActionDescriptor %s.%s>' % (self.controller_name, self.name)

    @property
    def func(self):
        return getattr(self.controller_class, self.method_name)

    def get_metadata(self, name, default=None):
        """Look up a marker set on the action, falling back to the controller class."""
        func = self.func
        if hasattr(func, name):
            return getattr(func, name)
        return getattr(self.controller_class, name, default)

    def accepts(self, name):
        return self.accepts_any or name in self.parameters


class ControllerRegistry:
    def __init__(self):
        self._controllers = {}

    def __contains__(self, name):
        return normalize(name) in self._controllers

    def __iter__(self):
        return (entry[0] for entry in self._controllers.values())

    def register(self, cls):
        if not (inspect.isclass(cls) and issubclass(cls, Controller)):
            raise ImproperlyConfigured('%r is not a Controller subclass' % (cls,))

        name = cls.name or controller_name_for(cls)
        key = normalize(name)
        existing = self._controllers.get(key)
        if existing is not None and existing[0] is not cls:
            raise ImproperlyConfigured('Controller %r is registered twice: %s and %s' % (
                name, existing[0].__qualname__, cls.__qualname__,
            ))

        actions = {}
        for klass in cls.__mro__:
            if klass is Controller:
                break
            if not issubclass(klass, Controller):
                continue
            for attr, value in vars(klass).items():
                if attr.startswith('_') or not inspect.isfunction(value) or getattr(value, 'non_action', False):
                    continue
                actions.setdefault(normalize(attr), ActionDescriptor(cls, name, attr, value))

        self._controllers[key] = (cls, actions)
        return cls

    def unregister(self, cls):
        self._controllers.pop(normalize(cls.name or controller_name_for(cls)), None)

    def get_controller(self, name):
        entry = self._controllers.get(normalize(name))
        return entry[0] if entry else None

    def get_actions(self, controller):
        entry = self._controllers.get(normalize(controller))
        return list(entry[1].values()) if entry else []

    def get_action(self, controller, action):
        if not controller or not action:
            return None
        entry = self._controllers.get(normalize(controller))
        if entry is None:
            return None
        return entry[1].get(normalize(action))


registry = ControllerRegistry()
register = registry.register
