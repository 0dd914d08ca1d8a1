# apps/accounts/models.py

from django.contrib.auth.models import AbstractUser
from django.core.validators import RegexValidator
from django.db import models
from .managers import UserManager


class User(AbstractUser):
    """
    Farmer account keyed by phone number.

    Accounts are created on first successful OTP verification, so there is
    no username and the password is unusable.
    """

    USERNAME_FIELD = 'phone_number'
    REQUIRED_FIELDS = []

    ROLE_CHOICES = (
        ('farmer', 'Farmer'),
        ('admin', 'Administrator'),
    )

    username = None

    phone_validator = RegexValidator(
        regex=r'^\d{10}$',
        message="Phone number must be a 10-digit mobile number"
    )

    phone_number = models.CharField(
        max_length=15,
        unique=True,
        validators=[phone_validator],
        db_index=True
    )

    role = models.CharField(
        max_length=10,
        choices=ROLE_CHOICES,
        default='farmer',
        db_index=True
    )

    # Gates whether the client should collect the farmer profile
    is_profile_completed = models.BooleanField(default=False)

    # None = not asked yet
    analytics_consent = models.BooleanField(null=True, blank=True, default=None)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    class Meta:
        db_table = 'users'
        ordering = ['-date_joined']

    def __str__(self):
        return f"{self.phone_number} ({self.get_role_display()})"

    @property
    def consent_given(self):
        """True once the user has answered the analytics consent prompt"""
        return self.analytics_consent is not None

    def record_consent(self, consent):
        """Store the analytics consent answer"""
        self.analytics_consent = consent
        self.save(update_fields=['analytics_consent', 'updated_at'])

    def mark_profile_completed(self):
        self.is_profile_completed = True
        self.save(update_fields=['is_profile_completed', 'updated_at'])
