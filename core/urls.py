from django.urls import path
from . import views

urlpatterns = [
    # --- Job Board ---
    path('', views.job_board, name='job_board'),

    # --- Job Intake ---
    path('add/', views.add_job, name='add_job'),
]
