# apps/crops/filters.py

import django_filters
from .models import Crop


class CropFilter(django_filters.FilterSet):
    season = django_filters.ChoiceFilter(choices=Crop.SEASON_CHOICES)
    status = django_filters.ChoiceFilter(choices=Crop.STATUS_CHOICES)
    year = django_filters.NumberFilter(field_name='year')

    class Meta:
        model = Crop
        fields = ['season', 'status', 'year']
