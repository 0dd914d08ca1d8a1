# apps/crops/models.py

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from apps.accounts.models import User


def current_year():
    return timezone.localdate().year


class Crop(models.Model):
    """
    A crop planted by a farmer in one season of a year.

    Several plantings of the same crop in a year are told apart by
    ``batch_label``.
    """

    SEASON_CHOICES = (
        ('Kharif', 'Kharif'),
        ('Rabi', 'Rabi'),
        ('Summer', 'Summer'),
    )

    AREA_UNIT_CHOICES = (
        ('Bigha', 'Bigha'),
        ('Acre', 'Acre'),
        ('Hectare', 'Hectare'),
    )

    STATUS_CHOICES = (
        ('Active', 'Active'),
        ('Harvested', 'Harvested'),
        ('Closed', 'Closed'),
    )

    # Owner
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='crops'
    )

    # Season
    season = models.CharField(max_length=10, choices=SEASON_CHOICES)
    year = models.PositiveIntegerField(default=current_year, db_index=True)

    # Crop details
    crop_name = models.CharField(max_length=100)
    crop_emoji = models.CharField(max_length=16, default='🌱')
    sub_type = models.CharField(max_length=100, blank=True, default='')
    batch_label = models.CharField(
        max_length=50,
        blank=True,
        default='',
        help_text='Distinguishes plantings of the same crop in one year'
    )

    # Land
    area = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    area_unit = models.CharField(
        max_length=10,
        choices=AREA_UNIT_CHOICES,
        default='Bigha'
    )

    # Dates
    sowing_date = models.DateField(null=True, blank=True)
    harvest_date = models.DateField(null=True, blank=True)

    # Status
    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default='Active'
    )

    notes = models.CharField(max_length=500, blank=True, default='')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'crops'
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'crop_name', 'year', 'batch_label'],
                name='unique_crop_batch_per_year'
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'season'], name='crops_user_season_idx'),
            models.Index(fields=['user', 'status'], name='crops_user_status_idx'),
            models.Index(fields=['user', 'year'], name='crops_user_year_idx'),
        ]

    def __str__(self):
        label = f" ({self.batch_label})" if self.batch_label else ''
        return f"{self.crop_name}{label} - {self.season} {self.year}"

    def set_status(self, status):
        self.status = status
        self.save(update_fields=['status', 'updated_at'])

    def mark_harvested(self, harvest_date=None):
        """Flag the crop as harvested, defaulting the date to today"""
        self.status = 'Harvested'
        self.harvest_date = harvest_date or timezone.localdate()
        self.save(update_fields=['status', 'harvest_date', 'updated_at'])
