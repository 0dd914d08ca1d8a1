# apps/farmers/services/farmer_profile_service.py

import logging

from django.db import transaction
from apps.farmers.models import FarmerProfile

logger = logging.getLogger(__name__)


class FarmerProfileService:
    """
    Service class for farmer profile operations
    """

    @staticmethod
    def get_profile(user):
        """
        Get the profile owned by a user

        Returns:
            FarmerProfile: Profile instance or None
        """
        return FarmerProfile.objects.filter(user=user).first()

    @staticmethod
    @transaction.atomic
    def complete_profile(user, data):
        """
        Create the farmer profile and flag the user as onboarded

        Args:
            user: User instance
            data: Dictionary of validated profile fields

        Returns:
            FarmerProfile: Created profile instance

        Raises:
            ValueError: If the user already has a profile
        """
        if FarmerProfile.objects.filter(user=user).exists():
            raise ValueError("Profile already exists. Use PUT /api/v1/profile/update/")

        profile = FarmerProfile.objects.create(user=user, **data)
        user.mark_profile_completed()

        logger.info(f"Farmer profile {profile.id} completed for user {user.id}")
        return profile

    @staticmethod
    def update_profile(profile, data):
        """
        Apply validated updates to a profile

        Args:
            profile: FarmerProfile instance
            data: Dictionary of validated fields

        Returns:
            FarmerProfile: Updated profile
        """
        for field, value in data.items():
            setattr(profile, field, value)

        profile.save()
        logger.info(f"Farmer profile {profile.id} updated: {', '.join(sorted(data))}")
        return profile
