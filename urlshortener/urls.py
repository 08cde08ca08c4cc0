from mvc.routing import map_controller_route

urlpatterns = [
    map_controller_route(
        name='default',
        pattern='{controller=Home}/{action=Index}/{id?}',
    ),
]

handler500 = 'pipeline.views.server_error'
