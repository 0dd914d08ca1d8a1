# apps/accounts/urls.py

from django.urls import path
from .views import (
    SendCodeView,
    VerifyCodeView,
    ConsentView,
    current_user
)

app_name = 'accounts'

urlpatterns = [
    # OTP login
    path('send-code/', SendCodeView.as_view(), name='send_code'),
    path('verify-code/', VerifyCodeView.as_view(), name='verify_code'),

    # Gating
    path('consent/', ConsentView.as_view(), name='consent'),
    path('me/', current_user, name='current_user'),
]
