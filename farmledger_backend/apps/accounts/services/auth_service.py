# apps/accounts/services/auth_service.py

import logging
from datetime import datetime, timezone as dt_timezone

from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from integrations.two_factor.otp import TwoFactorOTPService, mask_phone

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service class for OTP login and session token issuance
    """

    @staticmethod
    def get_otp_service():
        return TwoFactorOTPService.from_settings()

    @staticmethod
    def generate_tokens(user):
        """
        Generate JWT access and refresh tokens for user

        Args:
            user: User instance

        Returns:
            dict: Dictionary containing access and refresh tokens
        """
        refresh = RefreshToken.for_user(user)

        # Add custom claims
        refresh['role'] = user.role
        refresh['phone_number'] = user.phone_number

        access = refresh.access_token

        return {
            'access': str(access),
            'refresh': str(refresh),
            'access_expires': datetime.fromtimestamp(
                access['exp'], tz=dt_timezone.utc
            ).isoformat(),
        }

    @staticmethod
    def send_login_code(phone_number, otp_service=None):
        """
        Start an OTP login for a phone number

        Returns:
            str: provider session id the client must echo back on verify
        """
        otp_service = otp_service or AuthService.get_otp_service()
        return otp_service.send_otp(phone_number)

    @staticmethod
    def verify_login_code(phone_number, otp, session_id, otp_service=None):
        """
        Verify an OTP and log the user in, creating the account on first login

        Returns:
            dict or None: login payload, or None if the code did not match
        """
        otp_service = otp_service or AuthService.get_otp_service()

        if not otp_service.verify_otp(session_id, otp):
            return None

        user, created = User.objects.get_or_create_for_phone(phone_number)
        if created:
            logger.info(f"Created user {user.id} for {mask_phone(user.phone_number)}")

        tokens = AuthService.generate_tokens(user)

        return {
            'user': user,
            'token': tokens['access'],
            'refresh': tokens['refresh'],
            'access_expires': tokens['access_expires'],
            'is_new_user': created,
            'is_profile_completed': user.is_profile_completed,
            'consent_given': user.consent_given,
        }

    @staticmethod
    def record_consent(user, consent):
        """
        Record the one-time analytics consent answer

        Raises:
            ValueError: If consent was already recorded
        """
        if user.consent_given:
            raise ValueError('Consent has already been recorded')

        user.record_consent(consent)
        logger.info(f"User {user.id} analytics consent set to {consent}")
        return user
