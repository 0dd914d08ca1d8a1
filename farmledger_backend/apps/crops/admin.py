# apps/crops/admin.py

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html
from .models import Crop


@admin.register(Crop)
class CropAdmin(admin.ModelAdmin):
    """Admin interface for Crop model"""

    list_display = [
        'crop_display',
        'user_link',
        'season',
        'year',
        'batch_label',
        'area_display',
        'status_badge',
        'created_at'
    ]

    list_filter = ['season', 'year', 'status', 'area_unit', 'created_at']

    search_fields = [
        'crop_name',
        'sub_type',
        'batch_label',
        'user__phone_number'
    ]

    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Owner', {
            'fields': ('user',)
        }),
        ('Crop', {
            'fields': (
                'season',
                'year',
                'crop_name',
                'crop_emoji',
                'sub_type',
                'batch_label'
            )
        }),
        ('Land & Dates', {
            'fields': (
                'area',
                'area_unit',
                'sowing_date',
                'harvest_date'
            )
        }),
        ('Status', {
            'fields': ('status', 'notes', 'created_at', 'updated_at')
        }),
    )

    ordering = ['-created_at']
    actions = ['mark_closed']

    def crop_display(self, obj):
        return f"{obj.crop_emoji} {obj.crop_name}"
    crop_display.short_description = 'Crop'

    def user_link(self, obj):
        """Link to user admin page"""
        url = reverse('admin:accounts_user_change', args=[obj.user.id])
        return format_html('<a href="{}">{}</a>', url, obj.user.phone_number)
    user_link.short_description = 'User'

    def area_display(self, obj):
        return f"{obj.area} {obj.area_unit}"
    area_display.short_description = 'Area'

    def status_badge(self, obj):
        """Display status with color"""
        colors = {
            'Active': 'green',
            'Harvested': 'orange',
            'Closed': 'gray',
        }
        return format_html(
            '<span style="color: {};">{}</span>',
            colors.get(obj.status, 'black'),
            obj.status
        )
    status_badge.short_description = 'Status'

    def mark_closed(self, request, queryset):
        updated = queryset.update(status='Closed')
        self.message_user(request, f'{updated} crop(s) closed.')
    mark_closed.short_description = 'Close selected crops'

    def get_queryset(self, request):
        """Optimize queryset"""
        qs = super().get_queryset(request)
        return qs.select_related('user')
