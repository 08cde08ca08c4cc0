from django.apps import AppConfig
from django.utils.module_loading import autodiscover_modules


class MvcConfig(AppConfig):
    name = 'mvc'
    verbose_name = 'MVC routing'

    def ready(self):
        # Controllers register themselves when their app's controllers module is imported.
        autodiscover_modules('controllers')
