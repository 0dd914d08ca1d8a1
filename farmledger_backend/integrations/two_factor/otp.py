# OTP delivery and verification using 2Factor

import logging

import requests
from django.conf import settings

from core.exceptions import OTPProviderError

logger = logging.getLogger(__name__)


def mask_phone(phone_number):
    """Hide all but the last four digits of a phone number for logging"""
    if not phone_number:
        return ''
    return '*' * max(len(phone_number) - 4, 0) + phone_number[-4:]


class TwoFactorOTPService:
    """
    Client for the 2Factor SMS OTP API.

    The provider generates and delivers the code itself; we only keep the
    session id it hands back and later ask it to match the code.
    """

    SUCCESS_STATUS = 'Success'

    def __init__(self, api_key, base_url, timeout=10):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    @classmethod
    def from_settings(cls):
        return cls(
            api_key=getattr(settings, 'TWO_FACTOR_API_KEY', ''),
            base_url=getattr(settings, 'TWO_FACTOR_BASE_URL', 'https://2factor.in/API/V1'),
            timeout=getattr(settings, 'TWO_FACTOR_TIMEOUT', 10),
        )

    def _get(self, path):
        if not self.api_key:
            raise OTPProviderError('OTP provider is not configured')

        url = f'{self.base_url}/{self.api_key}/{path}'
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"2Factor request failed: {e}")
            raise OTPProviderError(f'OTP provider error: {e}')

        if response.status_code >= 500:
            logger.error(f"2Factor returned HTTP {response.status_code}")
            raise OTPProviderError(f'OTP provider error: HTTP {response.status_code}')

        try:
            return response.json()
        except ValueError:
            logger.error(f"2Factor returned a non-JSON body (HTTP {response.status_code})")
            raise OTPProviderError('OTP provider returned an invalid response')

    def send_otp(self, phone_number):
        """
        Ask the provider to generate and deliver an OTP.

        Returns:
            str: provider session id used later for verification
        """
        payload = self._get(f'SMS/{phone_number}/AUTOGEN')

        if payload.get('Status') != self.SUCCESS_STATUS:
            logger.warning(f"OTP send failed for {mask_phone(phone_number)}: {payload.get('Details')}")
            raise OTPProviderError(f"OTP send failed: {payload.get('Details', 'unknown error')}")

        logger.info(f"OTP sent to {mask_phone(phone_number)}")
        return payload.get('Details')

    def verify_otp(self, session_id, otp):
        """
        Check a code against the provider session.

        Returns:
            bool: True if the provider matched the code
        """
        payload = self._get(f'SMS/VERIFY/{session_id}/{otp}')
        matched = payload.get('Status') == self.SUCCESS_STATUS

        if not matched:
            logger.info(f"OTP mismatch for session {session_id}: {payload.get('Details')}")

        return matched
