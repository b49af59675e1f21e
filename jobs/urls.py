from django.urls import path
from .views import JobListCreateAPI

urlpatterns = [
    # Mounted at 'api', so this is '/api' itself
    path('', JobListCreateAPI.as_view(), name='job-list'),
]
