# apps/farmers/models.py

from django.db import models
from django.core.validators import MinValueValidator
from apps.accounts.models import User


class FarmerProfile(models.Model):
    """
    Farmer profile collected once after the first login.

    Location fields store stable English keys; the client resolves the
    localized display labels.
    """

    DISTRICT_CHOICES = (
        ('Rajkot', 'Rajkot'),
        ('Jamnagar', 'Jamnagar'),
        ('Junagadh', 'Junagadh'),
        ('Amreli', 'Amreli'),
        ('Morbi', 'Morbi'),
        ('Bhavnagar', 'Bhavnagar'),
        ('Surendranagar', 'Surendranagar'),
        ('Other', 'Other'),
    )

    LAND_UNIT_CHOICES = (
        ('acre', 'Acre'),
        ('bigha', 'Bigha'),
    )

    WATER_SOURCE_CHOICES = (
        ('Rain', 'Rain'),
        ('Borewell', 'Borewell'),
        ('Canal', 'Canal'),
    )

    LABOUR_TYPE_CHOICES = (
        ('Family', 'Family'),
        ('Hired', 'Hired'),
        ('Mixed', 'Mixed'),
    )

    # User Relationship
    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='farmer_profile'
    )

    # Personal Information
    name = models.CharField(max_length=200)

    # Location Information
    district = models.CharField(max_length=50, choices=DISTRICT_CHOICES)
    taluka = models.CharField(max_length=100)
    village = models.CharField(max_length=100)

    # Land
    total_land_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    total_land_unit = models.CharField(
        max_length=10,
        choices=LAND_UNIT_CHOICES,
        default='acre'
    )

    # Farming Resources
    water_source = models.CharField(max_length=20, choices=WATER_SOURCE_CHOICES)
    tractor_available = models.BooleanField()
    labour_type = models.CharField(max_length=20, choices=LABOUR_TYPE_CHOICES)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'farmer_profiles'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['district'], name='farmer_prof_distric_6f1c2a_idx'),
            models.Index(fields=['district', 'taluka'], name='farmer_prof_distric_9b4e7d_idx'),
            models.Index(fields=['district', 'taluka', 'village'], name='farmer_prof_distric_3a8d51_idx'),
        ]

    def __str__(self):
        return f"{self.name} - {self.village}, {self.district}"
