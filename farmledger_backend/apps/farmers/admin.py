# apps/farmers/admin.py

import csv

from django.contrib import admin
from django.http import HttpResponse
from django.urls import reverse
from django.utils.html import format_html
from .models import FarmerProfile


@admin.register(FarmerProfile)
class FarmerProfileAdmin(admin.ModelAdmin):
    """Admin interface for FarmerProfile model"""

    list_display = [
        'name',
        'user_link',
        'district',
        'taluka',
        'village',
        'land_display',
        'water_source',
        'tractor_available',
        'labour_type',
        'created_at'
    ]

    list_filter = [
        'district',
        'water_source',
        'tractor_available',
        'labour_type',
        'total_land_unit',
        'created_at'
    ]

    search_fields = [
        'name',
        'taluka',
        'village',
        'user__phone_number'
    ]

    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('User', {
            'fields': ('user', 'name')
        }),
        ('Location', {
            'fields': ('district', 'taluka', 'village')
        }),
        ('Land & Resources', {
            'fields': (
                'total_land_value',
                'total_land_unit',
                'water_source',
                'tractor_available',
                'labour_type'
            )
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    actions = ['export_to_csv']

    def user_link(self, obj):
        """Link to user admin page"""
        url = reverse('admin:accounts_user_change', args=[obj.user.id])
        return format_html('<a href="{}">{}</a>', url, obj.user.phone_number)
    user_link.short_description = 'User'

    def land_display(self, obj):
        return f"{obj.total_land_value} {obj.total_land_unit}"
    land_display.short_description = 'Land'

    def export_to_csv(self, request, queryset):
        """Export to CSV"""
        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename="farmer_profiles.csv"'

        writer = csv.writer(response)
        writer.writerow([
            'Name', 'Phone', 'District', 'Taluka', 'Village', 'Land',
            'Water Source', 'Tractor', 'Labour', 'Created'
        ])

        for profile in queryset.select_related('user'):
            writer.writerow([
                profile.name,
                profile.user.phone_number,
                profile.district,
                profile.taluka,
                profile.village,
                f"{profile.total_land_value} {profile.total_land_unit}",
                profile.water_source,
                'Yes' if profile.tractor_available else 'No',
                profile.labour_type,
                profile.created_at.strftime('%Y-%m-%d %H:%M')
            ])

        return response
    export_to_csv.short_description = 'Export to CSV'

    def get_queryset(self, request):
        """Optimize queryset"""
        qs = super().get_queryset(request)
        return qs.select_related('user')
