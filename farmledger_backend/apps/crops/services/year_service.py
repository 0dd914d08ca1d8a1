# apps/crops/services/year_service.py

from django.utils import timezone
from apps.crops.models import Crop


class CropYearService:

    @staticmethod
    def years_for(user):
        """
        Distinct years the user has crops in, newest first.

        Falls back to the current year so the client always has a year to show.
        """
        years = list(
            Crop.objects
            .filter(user=user)
            .order_by('-year')
            .values_list('year', flat=True)
            .distinct()
        )
        return years or [timezone.localdate().year]
