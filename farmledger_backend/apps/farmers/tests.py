# apps/farmers/tests.py

from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient, APITestCase
from rest_framework import status

from apps.accounts.models import User
from .models import FarmerProfile
from .services import FarmerProfileService


def profile_payload(**overrides):
    data = {
        'name': 'Ramesh Patel',
        'district': 'Jamnagar',
        'taluka': 'Kalavad',
        'village': 'Khijadia',
        'total_land_value': '12.50',
        'total_land_unit': 'bigha',
        'water_source': 'Borewell',
        'tractor_available': True,
        'labour_type': 'Mixed',
    }
    data.update(overrides)
    return data


class FarmerProfileServiceTestCase(TestCase):
    """Test cases for FarmerProfileService"""

    def setUp(self):
        self.user = User.objects.create_user(phone_number='9876543210')

    def test_complete_profile_marks_user(self):
        data = profile_payload(total_land_value=Decimal('12.50'))
        profile = FarmerProfileService.complete_profile(self.user, data)

        self.user.refresh_from_db()
        self.assertTrue(self.user.is_profile_completed)
        self.assertEqual(profile.user, self.user)
        self.assertEqual(profile.district, 'Jamnagar')

    def test_complete_profile_twice_rejected(self):
        FarmerProfileService.complete_profile(self.user, profile_payload(total_land_value=Decimal('1')))

        with self.assertRaises(ValueError):
            FarmerProfileService.complete_profile(self.user, profile_payload(total_land_value=Decimal('2')))

        self.assertEqual(FarmerProfile.objects.count(), 1)

    def test_get_profile_missing(self):
        self.assertIsNone(FarmerProfileService.get_profile(self.user))


class ProfileAPITestCase(APITestCase):
    """Test cases for profile endpoints"""

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(phone_number='9876543210')
        self.client.force_authenticate(user=self.user)

        self.complete_url = reverse('farmers:profile_complete')
        self.me_url = reverse('farmers:my_profile')
        self.update_url = reverse('farmers:profile_update')

    def test_complete_profile(self):
        response = self.client.post(self.complete_url, profile_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['data']['village'], 'Khijadia')

        self.user.refresh_from_db()
        self.assertTrue(self.user.is_profile_completed)

    def test_complete_profile_twice(self):
        self.client.post(self.complete_url, profile_payload(), format='json')
        response = self.client.post(self.complete_url, profile_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertEqual(FarmerProfile.objects.count(), 1)

    def test_complete_profile_invalid_district(self):
        response = self.client.post(
            self.complete_url,
            profile_payload(district='Ahmedabad'),
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('district', response.data['errors'])
        self.user.refresh_from_db()
        self.assertFalse(self.user.is_profile_completed)

    def test_complete_profile_negative_land(self):
        response = self.client.post(
            self.complete_url,
            profile_payload(total_land_value='-1'),
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('total_land_value', response.data['errors'])

    def test_complete_profile_missing_fields(self):
        response = self.client.post(self.complete_url, {'name': 'Ramesh'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('water_source', response.data['errors'])

    def test_get_profile_not_found(self):
        response = self.client.get(self.me_url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'Profile not found')

    def test_get_profile(self):
        self.client.post(self.complete_url, profile_payload(), format='json')
        response = self.client.get(self.me_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['name'], 'Ramesh Patel')
        self.assertEqual(response.data['data']['phone_number'], '9876543210')

    def test_update_profile(self):
        self.client.post(self.complete_url, profile_payload(), format='json')
        response = self.client.patch(
            self.update_url,
            {'water_source': 'Canal', 'village': 'Moti Vavdi'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        profile = FarmerProfile.objects.get(user=self.user)
        self.assertEqual(profile.water_source, 'Canal')
        self.assertEqual(profile.village, 'Moti Vavdi')
        self.assertEqual(profile.taluka, 'Kalavad')

    def test_update_ignores_unknown_fields(self):
        self.client.post(self.complete_url, profile_payload(), format='json')
        response = self.client.put(
            self.update_url,
            {'labour_type': 'Family', 'user': 999},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(FarmerProfile.objects.get().user, self.user)

    def test_update_no_valid_fields(self):
        self.client.post(self.complete_url, profile_payload(), format='json')
        response = self.client.put(self.update_url, {'unknown': 'x'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])

    def test_update_revalidates(self):
        self.client.post(self.complete_url, profile_payload(), format='json')
        response = self.client.put(self.update_url, {'water_source': 'River'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(FarmerProfile.objects.get().water_source, 'Borewell')

    def test_update_without_profile(self):
        response = self.client.put(self.update_url, {'name': 'New Name'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_profile_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(self.me_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
