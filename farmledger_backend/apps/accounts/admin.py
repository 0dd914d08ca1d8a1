# apps/accounts/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Custom admin interface for User model"""

    list_display = [
        'phone_number',
        'role',
        'is_profile_completed',
        'analytics_consent',
        'is_active',
        'date_joined'
    ]

    list_filter = [
        'role',
        'is_profile_completed',
        'analytics_consent',
        'is_active',
        'is_staff'
    ]

    search_fields = ['phone_number']
    ordering = ['-date_joined']

    readonly_fields = [
        'date_joined',
        'last_login',
        'created_at',
        'updated_at'
    ]

    fieldsets = (
        ('Account', {
            'fields': ('phone_number', 'role')
        }),
        ('Onboarding', {
            'fields': ('is_profile_completed', 'analytics_consent')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',)
        }),
        ('Important Dates', {
            'fields': ('date_joined', 'last_login', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    add_fieldsets = (
        ('Create New User', {
            'classes': ('wide',),
            'fields': ('phone_number', 'role', 'password1', 'password2'),
        }),
    )
