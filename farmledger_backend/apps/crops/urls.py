# apps/crops/urls.py

from django.urls import path
from . import views

app_name = 'crops'

urlpatterns = [
    path('', views.CropListCreateView.as_view(), name='crop_list'),
    path('years/', views.crop_years, name='crop_years'),
    path('report/', views.crop_report, name='crop_report'),
    path('<int:pk>/', views.CropDetailView.as_view(), name='crop_detail'),
    path('<int:pk>/status/', views.CropStatusView.as_view(), name='crop_status'),
    path('<int:pk>/harvest/', views.CropHarvestView.as_view(), name='crop_harvest'),
]
