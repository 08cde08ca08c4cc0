import json

from django.http import Http404, HttpResponse, JsonResponse
from django.test import RequestFactory, SimpleTestCase

from mvc.controllers import Controller, ControllerRegistry, http_post
from mvc.routing import RoutePattern, map_controller_route
from mvc.views import ControllerDispatchView, resolve_endpoint

registry = ControllerRegistry()


@registry.register
class HomeController(Controller):
    def index(self, id=None):
        return JsonResponse({'action': self.action_name, 'id': id})

    def privacy(self):
        return JsonResponse({'action': self.action_name})

    def catch_all(self, **kwargs):
        return JsonResponse(kwargs)

    @http_post
    def save(self):
        return HttpResponse('saved')


class ControllerDispatchViewTestCase(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()
        self.pattern = RoutePattern('{controller=Home}/{action=Index}/{id?}')
        self.view = ControllerDispatchView.as_view(route_pattern=self.pattern, registry=registry)

    def dispatch(self, path, method='get'):
        request = getattr(self.factory, method)(path)
        match = map_controller_route('default', self.pattern, registry=registry).resolve(path.lstrip('/'))
        return self.view(request, **match.kwargs)

    def dispatch_json(self, path):
        return json.loads(self.dispatch(path).content)

    def test_root_is_home_index(self):
        """Test that / dispatches to the same action as /Home/Index."""
        self.assertEqual(self.dispatch_json('/'), self.dispatch_json('/Home/Index'))
        self.assertEqual(self.dispatch_json('/'), {'action': 'Index', 'id': None})

    def test_id_passed(self):
        """Test that /Home/Index/42 passes id='42' to Index."""
        self.assertEqual(self.dispatch_json('/Home/Index/42'), {'action': 'Index', 'id': '42'})

    def test_id_omitted(self):
        self.assertEqual(self.dispatch_json('/Home/Index'), {'action': 'Index', 'id': None})

    def test_case_insensitive(self):
        self.assertEqual(self.dispatch_json('/home/privacy'), {'action': 'Privacy'})

    def test_id_ignored_when_not_accepted(self):
        """Test that an id is not passed to actions that don't take one."""
        self.assertEqual(self.dispatch_json('/Home/Privacy/7'), {'action': 'Privacy'})

    def test_var_keyword_receives_id(self):
        self.assertEqual(self.dispatch_json('/Home/CatchAll/7'), {'id': '7'})
        self.assertEqual(self.dispatch_json('/Home/CatchAll'), {})

    def test_unknown_action(self):
        with self.assertRaises(Http404):
            self.dispatch('/Home/Nope')

    def test_unknown_controller(self):
        with self.assertRaises(Http404):
            self.dispatch('/Nope')

    def test_method_not_allowed(self):
        response = self.dispatch('/Home/Save')
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response['Allow'], 'POST')
        self.assertEqual(self.dispatch('/Home/Save', method='post').content, b'saved')


class ResolveEndpointTestCase(SimpleTestCase):
    def test_controller_route(self):
        url_pattern = map_controller_route('default', '{controller=Home}/{action=Index}/{id?}', registry=registry)
        values, action = resolve_endpoint(url_pattern.callback, {'action': 'Privacy'})
        self.assertEqual(values, {'controller': 'Home', 'action': 'Privacy', 'id': None})
        self.assertIs(action, registry.get_action('Home', 'Privacy'))

    def test_missing_action(self):
        url_pattern = map_controller_route('default', '{controller=Home}/{action=Index}/{id?}', registry=registry)
        values, action = resolve_endpoint(url_pattern.callback, {'controller': 'Nope'})
        self.assertEqual(values['controller'], 'Nope')
        self.assertIsNone(action)

    def test_other_view(self):
        def plain(request):
            pass

        self.assertEqual(resolve_endpoint(plain, {}), (None, None))
