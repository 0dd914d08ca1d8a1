# apps/finance/models.py

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from apps.accounts.models import User
from apps.crops.models import Crop
from .services.derived_fields import DerivedFieldCalculator


class FinancialRecord(models.Model):
    """
    Shared fields of expense and income rows.

    Each row carries exactly one sub-record: ``record_type`` names its kind
    and ``details`` holds its fields. ``amount`` is recomputed from the
    sub-record on every save.
    """

    # category -> record types allowed for it
    CATEGORY_KINDS = {}

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='%(class)ss'
    )

    date = models.DateField(default=timezone.localdate, db_index=True)
    notes = models.TextField(blank=True, default='')

    # Sub-record
    record_type = models.CharField(max_length=30)
    details = models.JSONField(default=dict)

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=0,
        help_text='Effective monetary value, derived from details'
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def clean(self):
        allowed = self.CATEGORY_KINDS.get(self.category)
        if allowed is None:
            raise ValidationError({'category': f"Unknown category: {self.category}"})

        if self.record_type not in allowed:
            raise ValidationError({
                'record_type': (
                    f"{self.category} requires a {' or '.join(allowed)} record, "
                    f"got {self.record_type or 'none'}"
                )
            })

        if not isinstance(self.details, dict) or not self.details:
            raise ValidationError({'details': f"{self.record_type} details are required"})

    def recompute(self):
        try:
            self.details = DerivedFieldCalculator.compute(self.record_type, self.details)
            self.amount = DerivedFieldCalculator.effective_amount(self.record_type, self.details)
        except ValueError as e:
            raise ValidationError({'details': str(e)})

    def save(self, *args, **kwargs):
        self.clean()
        self.recompute()

        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            kwargs['update_fields'] = set(update_fields) | {'details', 'amount', 'updated_at'}

        super().save(*args, **kwargs)


class Expense(FinancialRecord):
    """
    Money spent on a crop
    """

    CATEGORY_CHOICES = (
        ('Seed', 'Seed'),
        ('Fertilizer', 'Fertilizer'),
        ('Pesticide', 'Pesticide'),
        ('Labour', 'Labour'),
        ('Machinery', 'Machinery'),
    )

    CATEGORY_KINDS = {
        'Seed': ('seed',),
        'Fertilizer': ('fertilizer',),
        'Pesticide': ('pesticide',),
        'Labour': ('labour_daily', 'labour_contract'),
        'Machinery': ('machinery',),
    }

    # Deleting a crop leaves its expenses in place
    crop = models.ForeignKey(
        Crop,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='expenses'
    )

    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, db_index=True)

    class Meta:
        db_table = 'expenses'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'date'], name='expenses_user_date_idx'),
            models.Index(fields=['crop', 'category'], name='expenses_crop_category_idx'),
        ]

    def __str__(self):
        return f"{self.category} {self.amount} on {self.date}"


class Income(FinancialRecord):
    """
    Money received, optionally linked to a crop
    """

    CATEGORY_CHOICES = (
        ('Crop Sale', 'Crop Sale'),
        ('Subsidy', 'Subsidy'),
        ('Rental Income', 'Rental Income'),
        ('Other', 'Other'),
    )

    CATEGORY_KINDS = {
        'Crop Sale': ('crop_sale',),
        'Subsidy': ('subsidy',),
        'Rental Income': ('rental_income',),
        'Other': ('other_income',),
    }

    # Not all income is crop-linked (subsidy, rental)
    crop = models.ForeignKey(
        Crop,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name='incomes'
    )

    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, db_index=True)

    class Meta:
        db_table = 'income'
        ordering = ['-date', '-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'date'], name='income_user_date_idx'),
            models.Index(fields=['crop', 'category'], name='income_crop_category_idx'),
        ]

    def __str__(self):
        return f"{self.category} {self.amount} on {self.date}"
