# apps/accounts/tests.py

from unittest.mock import patch, MagicMock

import requests
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient, APITestCase
from rest_framework import status

from core.exceptions import OTPProviderError
from integrations.two_factor.otp import TwoFactorOTPService, mask_phone
from .models import User
from .services import AuthService


class UserModelTestCase(TestCase):
    """Test cases for User model"""

    def test_create_user(self):
        """Test creating a user"""
        user = User.objects.create_user(phone_number='9876543210')

        self.assertEqual(user.phone_number, '9876543210')
        self.assertEqual(user.role, 'farmer')
        self.assertFalse(user.is_profile_completed)
        self.assertIsNone(user.analytics_consent)
        self.assertFalse(user.consent_given)
        self.assertFalse(user.has_usable_password())
        self.assertTrue(user.is_active)
        self.assertFalse(user.is_staff)

    def test_create_superuser(self):
        """Test creating a superuser"""
        admin = User.objects.create_superuser(
            phone_number='9000000000',
            password='AdminPass123!'
        )

        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)
        self.assertEqual(admin.role, 'admin')

    def test_phone_number_normalized(self):
        """Test country prefixes are stripped"""
        user = User.objects.create_user(phone_number='+91 98765-43210')
        self.assertEqual(user.phone_number, '9876543210')

    def test_phone_number_unique(self):
        """Test phone number uniqueness"""
        User.objects.create_user(phone_number='9876543210')

        with self.assertRaises(Exception):
            User.objects.create_user(phone_number='9876543210')

    def test_get_or_create_for_phone(self):
        """Test find-or-create by phone"""
        user, created = User.objects.get_or_create_for_phone('9876543210')
        self.assertTrue(created)

        same, created = User.objects.get_or_create_for_phone('+919876543210')
        self.assertFalse(created)
        self.assertEqual(same.pk, user.pk)
        self.assertEqual(User.objects.count(), 1)


class TwoFactorOTPServiceTestCase(TestCase):
    """Test cases for the 2Factor client"""

    def setUp(self):
        self.service = TwoFactorOTPService(
            api_key='key',
            base_url='https://2factor.test/API/V1/',
            timeout=5
        )

    @patch('integrations.two_factor.otp.requests.get')
    def test_send_otp_returns_session(self, mock_get):
        mock_get.return_value = MagicMock(
            status_code=200,
            json=MagicMock(return_value={'Status': 'Success', 'Details': 'sess-123'})
        )

        session_id = self.service.send_otp('9876543210')

        self.assertEqual(session_id, 'sess-123')
        mock_get.assert_called_once_with(
            'https://2factor.test/API/V1/key/SMS/9876543210/AUTOGEN',
            timeout=5
        )

    @patch('integrations.two_factor.otp.requests.get')
    def test_send_otp_provider_failure(self, mock_get):
        mock_get.return_value = MagicMock(
            status_code=200,
            json=MagicMock(return_value={'Status': 'Error', 'Details': 'Invalid API Key'})
        )

        with self.assertRaises(OTPProviderError):
            self.service.send_otp('9876543210')

    @patch('integrations.two_factor.otp.requests.get')
    def test_network_error_raises_provider_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError('connection refused')

        with self.assertRaises(OTPProviderError):
            self.service.verify_otp('sess-123', '123456')

    @patch('integrations.two_factor.otp.requests.get')
    def test_verify_otp_mismatch(self, mock_get):
        mock_get.return_value = MagicMock(
            status_code=200,
            json=MagicMock(return_value={'Status': 'Error', 'Details': 'OTP Mismatch'})
        )

        self.assertFalse(self.service.verify_otp('sess-123', '000000'))

    def test_missing_api_key(self):
        service = TwoFactorOTPService(api_key='', base_url='https://2factor.test')

        with self.assertRaises(OTPProviderError):
            service.send_otp('9876543210')

    def test_mask_phone(self):
        self.assertEqual(mask_phone('9876543210'), '******3210')


class AuthServiceTestCase(TestCase):
    """Test cases for AuthService"""

    def test_generate_tokens(self):
        user = User.objects.create_user(phone_number='9876543210')
        tokens = AuthService.generate_tokens(user)

        self.assertIn('access', tokens)
        self.assertIn('refresh', tokens)
        self.assertIn('access_expires', tokens)

    def test_verify_login_code_mismatch_creates_nothing(self):
        otp_service = MagicMock()
        otp_service.verify_otp.return_value = False

        result = AuthService.verify_login_code('9876543210', '000000', 'sess', otp_service=otp_service)

        self.assertIsNone(result)
        self.assertFalse(User.objects.exists())

    def test_record_consent_only_once(self):
        user = User.objects.create_user(phone_number='9876543210')
        AuthService.record_consent(user, False)

        user.refresh_from_db()
        self.assertIs(user.analytics_consent, False)

        with self.assertRaises(ValueError):
            AuthService.record_consent(user, True)


class OTPLoginAPITestCase(APITestCase):
    """Test cases for the OTP login API"""

    def setUp(self):
        self.client = APIClient()
        self.send_url = reverse('accounts:send_code')
        self.verify_url = reverse('accounts:verify_code')

    @patch.object(TwoFactorOTPService, 'send_otp', return_value='sess-123')
    def test_send_code_success(self, mock_send):
        response = self.client.post(self.send_url, {'phone_number': '9876543210'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['data']['session_id'], 'sess-123')
        mock_send.assert_called_once_with('9876543210')

    def test_send_code_invalid_phone(self):
        response = self.client.post(self.send_url, {'phone_number': '12345'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertIn('phone_number', response.data['errors'])

    @patch.object(TwoFactorOTPService, 'send_otp', side_effect=OTPProviderError('OTP provider error: timeout'))
    def test_send_code_provider_down(self, _mock_send):
        response = self.client.post(self.send_url, {'phone_number': '9876543210'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['message'], 'OTP provider error: timeout')

    @patch.object(TwoFactorOTPService, 'verify_otp', return_value=True)
    def test_verify_code_creates_user(self, _mock_verify):
        data = {'phone_number': '9876543210', 'otp': '123456', 'session_id': 'sess-123'}
        response = self.client.post(self.verify_url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        payload = response.data['data']
        self.assertIn('token', payload)
        self.assertTrue(payload['is_new_user'])
        self.assertFalse(payload['is_profile_completed'])
        self.assertFalse(payload['consent_given'])
        self.assertTrue(User.objects.filter(phone_number='9876543210').exists())

    @patch.object(TwoFactorOTPService, 'verify_otp', return_value=True)
    def test_verify_code_existing_user(self, _mock_verify):
        User.objects.create_user(phone_number='9876543210', is_profile_completed=True)
        data = {'phone_number': '9876543210', 'otp': '123456', 'session_id': 'sess-123'}

        response = self.client.post(self.verify_url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['data']['is_new_user'])
        self.assertTrue(response.data['data']['is_profile_completed'])
        self.assertEqual(User.objects.count(), 1)

    @patch.object(TwoFactorOTPService, 'verify_otp', return_value=False)
    def test_verify_code_invalid(self, _mock_verify):
        data = {'phone_number': '9876543210', 'otp': '000000', 'session_id': 'sess-123'}
        response = self.client.post(self.verify_url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Invalid or expired OTP')
        self.assertFalse(User.objects.exists())

    def test_verify_code_missing_fields(self):
        response = self.client.post(self.verify_url, {'phone_number': '9876543210'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('otp', response.data['errors'])
        self.assertIn('session_id', response.data['errors'])

    @patch.object(TwoFactorOTPService, 'verify_otp', return_value=True)
    def test_issued_token_authenticates(self, _mock_verify):
        data = {'phone_number': '9876543210', 'otp': '123456', 'session_id': 'sess-123'}
        token = self.client.post(self.verify_url, data, format='json').data['data']['token']

        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = self.client.get(reverse('accounts:current_user'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['phone_number'], '9876543210')


class ConsentAPITestCase(APITestCase):
    """Test cases for analytics consent"""

    def setUp(self):
        self.client = APIClient()
        self.url = reverse('accounts:consent')
        self.user = User.objects.create_user(phone_number='9876543210')
        self.client.force_authenticate(user=self.user)

    def test_record_consent(self):
        response = self.client.post(self.url, {'consent': True}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['data']['analytics_consent'])
        self.user.refresh_from_db()
        self.assertTrue(self.user.analytics_consent)

    def test_consent_must_be_boolean(self):
        response = self.client.post(self.url, {'consent': 'yes'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.user.refresh_from_db()
        self.assertIsNone(self.user.analytics_consent)

    def test_consent_body_must_be_object(self):
        response = self.client.post(self.url, [True], format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.user.refresh_from_db()
        self.assertIsNone(self.user.analytics_consent)

    def test_consent_string_rejected(self):
        response = self.client.post(self.url, {'consent': 'true'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'consent: consent must be true or false')

    def test_consent_recorded_once(self):
        self.client.post(self.url, {'consent': False}, format='json')
        response = self.client.post(self.url, {'consent': True}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.user.refresh_from_db()
        self.assertIs(self.user.analytics_consent, False)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.post(self.url, {'consent': True}, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data['success'])
