from django.utils.cache import patch_cache_control
from django.utils.translation import gettext as _

from mvc.controllers import Controller, register
from pipeline.authorization import allow_anonymous


@register
class HomeController(Controller):
    def index(self):
        return self.view(context={
            'title': _('Home'),
        })

    def privacy(self):
        return self.view(context={
            'title': _('Privacy Policy'),
        })

    @allow_anonymous
    def error(self):
        response = self.view(context={
            'title': _('Error'),
        })
        patch_cache_control(response, no_store=True, no_cache=True, max_age=0)
        return response
