from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/auth/', include('apps.accounts.urls')),
    path('api/v1/profile/', include('apps.farmers.urls')),
    path('api/v1/crops/', include('apps.crops.urls')),
    path('api/v1/', include('apps.finance.urls')),
]
