# apps/farmers/urls.py

from django.urls import path
from . import views

app_name = 'farmers'

urlpatterns = [
    path('complete/', views.ProfileCompleteView.as_view(), name='profile_complete'),
    path('me/', views.MyProfileView.as_view(), name='my_profile'),
    path('update/', views.ProfileUpdateView.as_view(), name='profile_update'),
]
