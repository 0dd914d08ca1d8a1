# apps/finance/admin.py

from django.contrib import admin
from .models import Expense, Income


class FinancialRecordAdmin(admin.ModelAdmin):
    """Shared admin configuration for expense and income rows"""

    list_display = [
        'id',
        'user',
        'crop_id',
        'category',
        'record_type',
        'amount',
        'date',
        'created_at'
    ]

    list_filter = ['category', 'record_type', 'date', 'created_at']

    search_fields = ['user__phone_number', 'notes']

    readonly_fields = ['amount', 'created_at', 'updated_at']

    fieldsets = (
        ('Owner', {
            'fields': ('user', 'crop')
        }),
        ('Entry', {
            'fields': ('category', 'date', 'notes')
        }),
        ('Sub-record', {
            'fields': ('record_type', 'details', 'amount')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    date_hierarchy = 'date'
    raw_id_fields = ['user', 'crop']

    def get_queryset(self, request):
        """Optimize queryset"""
        qs = super().get_queryset(request)
        return qs.select_related('user')


@admin.register(Expense)
class ExpenseAdmin(FinancialRecordAdmin):
    """Admin interface for Expense model"""


@admin.register(Income)
class IncomeAdmin(FinancialRecordAdmin):
    """Admin interface for Income model"""
    ordering = ['-date']
