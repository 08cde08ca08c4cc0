"""
Conventional route templates such as ``{controller=Home}/{action=Index}/{id?}``.

A template is a list of ``/``-separated segments. A segment is either a literal
or exactly one parameter:

    {name}          required
    {name=default}  may be omitted, takes ``default``
    {name?}         may be omitted, takes ``None``

Omitting a segment omits every segment after it, so once a segment may be
omitted all later segments must be omittable too.
"""

import re
from collections import namedtuple

from django.urls import NoReverseMatch, re_path

PARAMETER_RE = re.compile(r'^\{(?P<name>[^{}=?]*)(?:=(?P<default>[^{}?]*)|(?P<optional>\?))?\}$')

RouteParameter = namedtuple('RouteParameter', ('name', 'default', 'optional'))


class RoutePatternError(ValueError):
    pass


class RouteSegment:
    __slots__ = ('literal', 'parameter')

    def __init__(self, literal=None, parameter=None):
        self.literal = literal
        self.parameter = parameter

    @property
    def omittable(self):
        return self.parameter is not None and (self.parameter.optional or self.parameter.default is not None)

    def regex(self):
        if self.parameter is None:
            return re.escape(self.literal)
        return '(?P<%s>[^/]+)' % self.parameter.name


def parse_segment(template, text):
    if not text:
        raise RoutePatternError('Route template %r contains an empty segment' % template)

    if '{' not in text and '}' not in text:
        return RouteSegment(literal=text)

    match = PARAMETER_RE.match(text)
    if match is None:
        raise RoutePatternError('Segment %r of route template %r must be a literal or a single {parameter}' %
                                (text, template))

    name = match.group('name')
    if not name.isidentifier():
        raise RoutePatternError('Invalid parameter name %r in route template %r' % (name, template))

    default = match.group('default')
    if default == '':
        raise RoutePatternError('Parameter %r in route template %r has an empty default' % (name, template))

    return RouteSegment(parameter=RouteParameter(name, default, match.group('optional') is not None))


class RoutePattern:
    def __init__(self, template):
        self.template = template
        self.segments = self._parse(template)
        self.parameters = [segment.parameter for segment in self.segments if segment.parameter is not None]
        self.defaults = {param.name: param.default for param in self.parameters if param.default is not None}
        self.regex = self._compile()
        self._compiled = re.compile(self.regex)

    def __repr__(self):
        return '<RoutePattern %r>' % self.template

    @staticmethod
    def _parse(template):
        stripped = template.strip('/')
        if not stripped:
            raise RoutePatternError('Route template must not be empty')

        segments = [parse_segment(template, text) for text in stripped.split('/')]

        seen = set()
        omitted = None
        for segment in segments:
            param = segment.parameter
            if param is not None:
                if param.name in seen:
                    raise RoutePatternError('Parameter %r appears twice in route template %r' % (param.name, template))
                seen.add(param.name)

            if segment.omittable:
                omitted = omitted or (param.name if param else segment.literal)
            elif omitted is not None:
                raise RoutePatternError(
                    'Segment %r of route template %r follows the omittable parameter %r and must be omittable too' %
                    (segment.literal or param.name, template, omitted),
                )
        return segments

    def _compile(self):
        first_omittable = next((i for i, segment in enumerate(self.segments) if segment.omittable), len(self.segments))

        head = '/'.join(segment.regex() for segment in self.segments[:first_omittable])
        tail = ''
        for index in range(len(self.segments) - 1, first_omittable - 1, -1):
            separator = '/' if index else ''
            tail = '(?:%s%s%s)?' % (separator, self.segments[index].regex(), tail)
        # Literals match case-insensitively.
        return '(?i)^%s%s/?$' % (head, tail)

    def fill_defaults(self, values):
        """Return a value for every parameter, using defaults for missing ones."""
        result = {}
        for param in self.parameters:
            value = values.get(param.name)
            if value is None or value == '':
                value = param.default
            result[param.name] = value
        return result

    def match(self, path):
        match = self._compiled.match(path.lstrip('/'))
        if match is None:
            return None
        return self.fill_defaults(match.groupdict())

    def reverse(self, **values):
        parts = []
        for segment in self.segments:
            if segment.parameter is None:
                parts.append(segment.literal)
                continue

            param = segment.parameter
            value = values.get(param.name)
            if value is None:
                value = param.default
            if value is None:
                if not param.optional:
                    raise NoReverseMatch('Missing value for %r in route template %r' % (param.name, self.template))
                # An omitted optional segment ends the path.
                break
            parts.append(str(value))

        # Drop trailing segments that only restate their defaults.
        while parts:
            segment = self.segments[len(parts) - 1]
            if not segment.omittable or segment.parameter.default is None:
                break
            if parts[-1].lower() != segment.parameter.default.lower():
                break
            parts.pop()

        return '/' + '/'.join(parts)


def map_controller_route(name, pattern, registry=None):
    """Return a URL pattern dispatching ``pattern`` to controller actions."""
    from mvc.views import ControllerDispatchView

    route_pattern = pattern if isinstance(pattern, RoutePattern) else RoutePattern(pattern)
    initkwargs = {'route_pattern': route_pattern}
    if registry is not None:
        initkwargs['registry'] = registry
    return re_path(route_pattern.regex, ControllerDispatchView.as_view(**initkwargs), name=name)
