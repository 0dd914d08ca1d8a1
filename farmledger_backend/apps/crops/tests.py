"""
Crops App Test Suite

Tests for:
- Crop CRUD and quick actions
- Crop years
- Yearly financial report
"""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient, APITestCase
from rest_framework import status

from apps.accounts.models import User
from apps.crops.models import Crop
from apps.crops.services import FinancialReportService, CropYearService
from apps.finance.models import Expense, Income


def make_crop(user, **overrides):
    data = {
        'season': 'Kharif',
        'year': 2025,
        'crop_name': 'Cotton',
        'area': Decimal('5.00'),
    }
    data.update(overrides)
    return Crop.objects.create(user=user, **data)


def add_expense(user, crop, total_cost):
    return Expense.objects.create(
        user=user,
        crop=crop,
        category='Fertilizer',
        record_type='fertilizer',
        details={'product_name': 'Urea', 'number_of_bags': 2, 'total_cost': total_cost}
    )


def add_sale(user, crop, quantity_kg, price_per_kg):
    return Income.objects.create(
        user=user,
        crop=crop,
        category='Crop Sale',
        record_type='crop_sale',
        details={'crop_name': crop.crop_name, 'quantity_kg': quantity_kg, 'price_per_kg': price_per_kg}
    )


class FinancialReportServiceTestCase(TestCase):
    """Test yearly report aggregation"""

    def setUp(self):
        self.user = User.objects.create_user(phone_number='9876543210')

    def test_no_crops_returns_zero_summary(self):
        report = FinancialReportService.yearly_report(self.user, 2025)

        self.assertEqual(report['year'], 2025)
        self.assertEqual(report['crops'], [])
        self.assertEqual(report['season_breakdown'], {})
        self.assertEqual(report['summary'], {
            'total_income': Decimal('0'),
            'total_expense': Decimal('0'),
            'net_profit': Decimal('0'),
            'total_crops': 0,
            'total_area': Decimal('0'),
        })

    def test_year_defaults_to_current(self):
        report = FinancialReportService.yearly_report(self.user)
        self.assertEqual(report['year'], timezone.localdate().year)

    def test_crop_without_transactions(self):
        make_crop(self.user)

        report = FinancialReportService.yearly_report(self.user, 2025)

        row = report['crops'][0]
        self.assertEqual(row['income'], Decimal('0'))
        self.assertEqual(row['expense'], Decimal('0'))
        self.assertEqual(row['profit'], Decimal('0'))
        self.assertEqual(report['summary']['total_crops'], 1)
        self.assertEqual(report['summary']['total_area'], Decimal('5.00'))

    def test_database_error_is_logged_with_traceback(self):
        make_crop(self.user)

        with patch.object(
            FinancialReportService,
            '_totals_by_crop',
            side_effect=DatabaseError('connection lost')
        ), patch('apps.crops.services.report_service.logger') as mock_logger:
            FinancialReportService.yearly_report(self.user, 2025)

        mock_logger.exception.assert_called_once()
        mock_logger.error.assert_not_called()

    def test_profit_per_crop(self):
        crop = make_crop(self.user)
        add_sale(self.user, crop, 100, 20)
        add_expense(self.user, crop, 500)
        add_expense(self.user, crop, 500)

        report = FinancialReportService.yearly_report(self.user, 2025)

        row = report['crops'][0]
        self.assertEqual(row['income'], Decimal('2000'))
        self.assertEqual(row['expense'], Decimal('1000'))
        self.assertEqual(row['profit'], Decimal('1000'))
        self.assertEqual(report['summary']['net_profit'], Decimal('1000'))

    def test_loss_is_negative(self):
        crop = make_crop(self.user)
        add_expense(self.user, crop, 1200)

        report = FinancialReportService.yearly_report(self.user, 2025)

        self.assertEqual(report['crops'][0]['profit'], Decimal('-1200'))
        self.assertEqual(report['summary']['net_profit'], Decimal('-1200'))

    def test_season_breakdown(self):
        cotton = make_crop(self.user, crop_name='Cotton', area=Decimal('4'))
        groundnut = make_crop(self.user, crop_name='Groundnut', area=Decimal('2'))
        wheat = make_crop(self.user, crop_name='Wheat', season='Rabi', area=Decimal('3'))
        add_sale(self.user, cotton, 100, 50)
        add_sale(self.user, groundnut, 10, 100)
        add_expense(self.user, wheat, 800)

        report = FinancialReportService.yearly_report(self.user, 2025)
        seasons = report['season_breakdown']

        self.assertEqual(list(seasons), ['Kharif', 'Rabi'])
        self.assertEqual(seasons['Kharif']['income'], Decimal('6000'))
        self.assertEqual(seasons['Kharif']['crop_count'], 2)
        self.assertEqual(seasons['Kharif']['area'], Decimal('6'))
        self.assertEqual(seasons['Rabi']['profit'], Decimal('-800'))
        self.assertEqual(report['summary']['total_area'], Decimal('9'))

    def test_area_summed_without_unit_conversion(self):
        make_crop(self.user, crop_name='Cotton', area=Decimal('2'), area_unit='Acre')
        make_crop(self.user, crop_name='Bajra', area=Decimal('3'), area_unit='Bigha')

        report = FinancialReportService.yearly_report(self.user, 2025)

        self.assertEqual(report['summary']['total_area'], Decimal('5'))

    def test_only_requested_year_and_owner(self):
        other = User.objects.create_user(phone_number='9123456780')
        old_crop = make_crop(self.user, year=2024)
        add_sale(self.user, old_crop, 10, 10)
        foreign = make_crop(other)
        add_sale(other, foreign, 10, 10)

        report = FinancialReportService.yearly_report(self.user, 2025)

        self.assertEqual(report['crops'], [])
        self.assertEqual(report['summary']['total_income'], Decimal('0'))

    def test_database_error_degrades_to_zero(self):
        crop = make_crop(self.user)
        add_sale(self.user, crop, 100, 20)

        with patch.object(
            FinancialReportService,
            '_totals_by_crop',
            side_effect=DatabaseError('connection lost')
        ):
            report = FinancialReportService.yearly_report(self.user, 2025)

        self.assertEqual(len(report['crops']), 1)
        self.assertEqual(report['crops'][0]['income'], Decimal('0'))
        self.assertEqual(report['summary']['total_income'], Decimal('0'))
        self.assertEqual(report['summary']['total_crops'], 1)

    def test_orphaned_rows_are_not_counted(self):
        crop = make_crop(self.user)
        add_sale(self.user, crop, 100, 20)
        crop.delete()
        make_crop(self.user, crop_name='Cotton', batch_label='second')

        report = FinancialReportService.yearly_report(self.user, 2025)

        self.assertEqual(report['summary']['total_income'], Decimal('0'))


class CropYearServiceTestCase(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(phone_number='9876543210')

    def test_years_newest_first(self):
        make_crop(self.user, year=2023)
        make_crop(self.user, year=2025)
        make_crop(self.user, year=2025, crop_name='Wheat')

        self.assertEqual(CropYearService.years_for(self.user), [2025, 2023])

    def test_current_year_when_empty(self):
        self.assertEqual(CropYearService.years_for(self.user), [timezone.localdate().year])


class CropAPITestCase(APITestCase):
    """Test crop endpoints"""

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(phone_number='9876543210')
        self.other = User.objects.create_user(phone_number='9123456780')
        self.client.force_authenticate(user=self.user)

        self.list_url = reverse('crops:crop_list')

    def detail_url(self, crop_id):
        return reverse('crops:crop_detail', args=[crop_id])

    def test_create_crop_with_defaults(self):
        response = self.client.post(self.list_url, {
            'season': 'Kharif',
            'crop_name': '  Cotton ',
            'area': 2.5,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data['data']
        self.assertEqual(data['crop_name'], 'Cotton')
        self.assertEqual(data['crop_emoji'], '🌱')
        self.assertEqual(data['area_unit'], 'Bigha')
        self.assertEqual(data['status'], 'Active')
        self.assertEqual(data['year'], timezone.localdate().year)
        self.assertEqual(Crop.objects.get().user, self.user)

    def test_create_requires_fields(self):
        response = self.client.post(self.list_url, {'notes': 'x'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ('season', 'crop_name', 'area'):
            self.assertIn(field, response.data['errors'])

    def test_create_rejects_small_area(self):
        response = self.client.post(self.list_url, {
            'season': 'Rabi',
            'crop_name': 'Wheat',
            'area': 0,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('area', response.data['errors'])

    def test_duplicate_batch_rejected(self):
        payload = {'season': 'Kharif', 'year': 2025, 'crop_name': 'Cotton', 'area': 2}
        self.client.post(self.list_url, payload, format='json')
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Crop.objects.count(), 1)

        response = self.client.post(self.list_url, {**payload, 'batch_label': 'Plot 2'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_same_crop_allowed_for_other_user(self):
        make_crop(self.other)
        response = self.client.post(self.list_url, {
            'season': 'Kharif', 'year': 2025, 'crop_name': 'Cotton', 'area': 2
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_list_filters_and_isolation(self):
        make_crop(self.user, crop_name='Cotton')
        make_crop(self.user, crop_name='Wheat', season='Rabi', status='Harvested')
        make_crop(self.user, crop_name='Bajra', season='Summer', year=2024)
        make_crop(self.other, crop_name='Cotton')

        response = self.client.get(self.list_url)
        self.assertEqual(response.data['pagination']['total'], 3)

        response = self.client.get(self.list_url, {'season': 'Rabi'})
        self.assertEqual([c['crop_name'] for c in response.data['data']], ['Wheat'])

        response = self.client.get(self.list_url, {'status': 'Active', 'year': 2025})
        self.assertEqual([c['crop_name'] for c in response.data['data']], ['Cotton'])

    def test_list_newest_first(self):
        make_crop(self.user, crop_name='First')
        make_crop(self.user, crop_name='Second')

        response = self.client.get(self.list_url)

        self.assertEqual([c['crop_name'] for c in response.data['data']], ['Second', 'First'])

    def test_list_invalid_season_filter(self):
        response = self.client.get(self.list_url, {'season': 'Monsoon'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_retrieve_other_users_crop(self):
        crop = make_crop(self.other)
        response = self.client.get(self.detail_url(crop.id))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'Crop not found.')

    def test_update_allowed_fields(self):
        crop = make_crop(self.user)
        response = self.client.put(self.detail_url(crop.id), {
            'notes': 'Drip irrigated',
            'area': 6,
            'user': self.other.id,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        crop.refresh_from_db()
        self.assertEqual(crop.notes, 'Drip irrigated')
        self.assertEqual(crop.area, Decimal('6'))
        self.assertEqual(crop.user, self.user)

    def test_update_no_valid_fields(self):
        crop = make_crop(self.user)
        response = self.client.patch(self.detail_url(crop.id), {'colour': 'green'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'No valid fields to update.')

    def test_update_rejects_non_object_body(self):
        crop = make_crop(self.user)
        response = self.client.patch(self.detail_url(crop.id), [{'notes': 'x'}], format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Request body must be a JSON object.')
        crop.refresh_from_db()
        self.assertEqual(crop.notes, '')

    def test_update_into_duplicate_rejected(self):
        make_crop(self.user, crop_name='Cotton')
        wheat = make_crop(self.user, crop_name='Wheat')

        response = self.client.patch(self.detail_url(wheat.id), {'crop_name': 'Cotton'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_validates_dates(self):
        crop = make_crop(self.user, sowing_date=date(2025, 6, 20))
        response = self.client.patch(self.detail_url(crop.id), {'harvest_date': '2025-06-01'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_missing_crop(self):
        response = self.client.delete(self.detail_url(9999))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data['success'])

    def test_delete_keeps_transactions(self):
        crop = make_crop(self.user)
        expense = add_expense(self.user, crop, 700)

        response = self.client.delete(self.detail_url(crop.id))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Crop deleted successfully.')
        self.assertFalse(Crop.objects.filter(id=crop.id).exists())

        # Orphaned expense remains listable and deletable
        expense.refresh_from_db()
        self.assertEqual(expense.crop_id, crop.id)

        response = self.client.get(reverse('finance:expense_list'))
        self.assertEqual(response.data['pagination']['total'], 1)

        response = self.client.delete(reverse('finance:expense_detail', args=[expense.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_status_quick_action(self):
        crop = make_crop(self.user)
        url = reverse('crops:crop_status', args=[crop.id])

        response = self.client.patch(url, {'status': 'Closed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['status'], 'Closed')

        response = self.client.patch(url, {'status': 'Sold'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Active, Harvested, Closed', response.data['message'])

    def test_harvest_defaults_to_today(self):
        crop = make_crop(self.user)
        response = self.client.patch(reverse('crops:crop_harvest', args=[crop.id]), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        crop.refresh_from_db()
        self.assertEqual(crop.status, 'Harvested')
        self.assertEqual(crop.harvest_date, timezone.localdate())

    def test_default_harvest_date_checked_against_sowing(self):
        sowing_date = timezone.localdate() + timedelta(days=30)
        crop = make_crop(self.user, sowing_date=sowing_date)

        response = self.client.patch(reverse('crops:crop_harvest', args=[crop.id]), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        crop.refresh_from_db()
        self.assertEqual(crop.status, 'Active')
        self.assertIsNone(crop.harvest_date)

    def test_harvest_with_date(self):
        crop = make_crop(self.user, sowing_date=date(2025, 6, 20))
        harvest_date = date(2025, 11, 5)

        response = self.client.patch(
            reverse('crops:crop_harvest', args=[crop.id]),
            {'harvest_date': harvest_date.isoformat()},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        crop.refresh_from_db()
        self.assertEqual(crop.harvest_date, harvest_date)

        response = self.client.patch(
            reverse('crops:crop_harvest', args=[crop.id]),
            {'harvest_date': (crop.sowing_date - timedelta(days=1)).isoformat()},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_years_endpoint(self):
        make_crop(self.user, year=2024)

        response = self.client.get(reverse('crops:crop_years'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data'], [2024])

    def test_report_endpoint(self):
        crop = make_crop(self.user)
        add_sale(self.user, crop, 100, 20)
        add_expense(self.user, crop, 1000)

        response = self.client.get(reverse('crops:crop_report'), {'year': 2025})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['data']['summary']['total_income'], 2000.0)
        self.assertEqual(body['data']['summary']['net_profit'], 1000.0)
        self.assertEqual(body['data']['crops'][0]['crop_name'], 'Cotton')

    def test_report_invalid_year(self):
        response = self.client.get(reverse('crops:crop_report'), {'year': 'last'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
