from django.contrib import admin
from django.urls import include, path, re_path

from . import views

urlpatterns = [
    # Operational
    path('', views.home, name='home'),
    path('health', views.health, name='health'),

    # Admin
    path('admin/', admin.site.urls),

    # API
    path('api/', include('api.urls')),

    # Anything else gets the JSON 404 even with DEBUG on
    re_path(r'^.*$', views.not_found),
]

handler404 = 'donorhub.views.not_found'
