# apps/finance/filters.py

import django_filters
from .models import Expense, Income


class ExpenseFilter(django_filters.FilterSet):
    crop = django_filters.NumberFilter(field_name='crop_id')
    category = django_filters.ChoiceFilter(choices=Expense.CATEGORY_CHOICES)
    year = django_filters.NumberFilter(field_name='date', lookup_expr='year')

    class Meta:
        model = Expense
        fields = ['crop', 'category', 'year']


class IncomeFilter(django_filters.FilterSet):
    crop = django_filters.NumberFilter(field_name='crop_id')
    category = django_filters.ChoiceFilter(choices=Income.CATEGORY_CHOICES)
    year = django_filters.NumberFilter(field_name='date', lookup_expr='year')

    class Meta:
        model = Income
        fields = ['crop', 'category', 'year']
