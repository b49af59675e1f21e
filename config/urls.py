from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path('admin/', admin.site.urls),

    # 1. Documentation (before 'api' so the prefix does not swallow it)
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    # 2. The Jobs API, served at '/api' itself
    path('api', include('jobs.urls')),

    # 3. The Board & the intake form
    path('', include('core.urls')),
]
