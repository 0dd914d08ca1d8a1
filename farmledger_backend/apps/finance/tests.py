"""
Finance App Test Suite

Tests for:
- Derived field calculator
- Expense/Income model save path
- Expense and income APIs
- Income summary
"""

from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient, APITestCase
from rest_framework import status

from apps.accounts.models import User
from apps.crops.models import Crop
from apps.finance.models import Expense, Income
from apps.finance.services import DerivedFieldCalculator
from apps.finance.services.income_summary import IncomeSummaryService


def make_crop(user, **overrides):
    data = {
        'season': 'Kharif',
        'year': 2025,
        'crop_name': 'Cotton',
        'area': Decimal('5.00'),
    }
    data.update(overrides)
    return Crop.objects.create(user=user, **data)


class DerivedFieldCalculatorTestCase(TestCase):
    """Test derived field calculations"""

    def test_seed_rate_per_kg(self):
        self.assertEqual(
            DerivedFieldCalculator.seed_rate_per_kg(1000, 3),
            Decimal('333.33')
        )

    def test_seed_rate_rounds_half_up(self):
        # 0.125 rounds up, not to even
        self.assertEqual(
            DerivedFieldCalculator.seed_rate_per_kg(1, 8),
            Decimal('0.13')
        )

    def test_seed_rate_without_quantity(self):
        self.assertIsNone(DerivedFieldCalculator.seed_rate_per_kg(500, 0))

    def test_labour_daily_total(self):
        self.assertEqual(
            DerivedFieldCalculator.labour_daily_total(4, 3, 350),
            Decimal('4200')
        )

    def test_labour_daily_rejects_zero_people(self):
        with self.assertRaises(ValueError):
            DerivedFieldCalculator.labour_daily_total(0, 3, 350)

    def test_amount_beyond_storage_rejected(self):
        with self.assertRaises(ValueError):
            DerivedFieldCalculator.machinery_total(1000000, 10000)

        with self.assertRaises(ValueError):
            DerivedFieldCalculator.effective_amount('labour_daily', {
                'number_of_people': 100000, 'days': 100000, 'daily_rate': 100000
            })

    def test_machinery_total(self):
        self.assertEqual(
            DerivedFieldCalculator.machinery_total(2.5, 800),
            Decimal('2000.00')
        )

    def test_crop_sale_total_avoids_float_error(self):
        # 0.1 * 3 is 0.30000000000000004 in binary floating point
        self.assertEqual(
            DerivedFieldCalculator.crop_sale_total(0.1, 3),
            Decimal('0.30')
        )

    def test_rental_total(self):
        self.assertEqual(
            DerivedFieldCalculator.rental_total(6, 450.5),
            Decimal('2703.00')
        )

    def test_compute_discards_client_derived_value(self):
        details = {'crop_name': 'Cotton', 'quantity_kg': 100, 'price_per_kg': 20, 'total_amount': 1}
        computed = DerivedFieldCalculator.compute('crop_sale', details)

        self.assertEqual(computed['total_amount'], 2000.0)
        # Input is left untouched
        self.assertEqual(details['total_amount'], 1)

    def test_compute_is_idempotent(self):
        details = {'seed_type': 'Hybrid', 'quantity_kg': 3, 'total_cost': 1000}
        once = DerivedFieldCalculator.compute('seed', details)
        twice = DerivedFieldCalculator.compute('seed', once)

        self.assertEqual(once, twice)

    def test_compute_drops_stale_rate(self):
        details = {'seed_type': 'Hybrid', 'quantity_kg': 0, 'total_cost': 1000, 'rate_per_kg': 50}
        computed = DerivedFieldCalculator.compute('seed', details)

        self.assertNotIn('rate_per_kg', computed)

    def test_compute_unknown_type(self):
        with self.assertRaises(ValueError):
            DerivedFieldCalculator.compute('lottery', {})

    def test_effective_amount(self):
        cases = [
            ('seed', {'seed_type': 'Hybrid', 'quantity_kg': 2, 'total_cost': 500}, Decimal('500.00')),
            ('pesticide', {'pesticide_category': 'Fungicide', 'dosage_ml': 250, 'cost': 640}, Decimal('640.00')),
            ('labour_daily', {'task': 'Weeding', 'number_of_people': 2, 'days': 2, 'daily_rate': 300}, Decimal('1200.00')),
            ('labour_contract', {'advance_reason': 'Festival', 'amount_given': 2500}, Decimal('2500.00')),
            ('subsidy', {'scheme_type': 'PM-KISAN', 'amount': 2000}, Decimal('2000.00')),
        ]
        for record_type, details, expected in cases:
            with self.subTest(record_type=record_type):
                self.assertEqual(
                    DerivedFieldCalculator.effective_amount(record_type, details),
                    expected
                )


class FinancialRecordModelTestCase(TestCase):
    """Test the model save path"""

    def setUp(self):
        self.user = User.objects.create_user(phone_number='9876543210')
        self.crop = make_crop(self.user)

    def test_save_computes_amount(self):
        expense = Expense.objects.create(
            user=self.user,
            crop=self.crop,
            category='Machinery',
            record_type='machinery',
            details={'implement': 'Rotavator', 'hours_or_acres': 3, 'rate': 900, 'is_contract': False}
        )

        self.assertEqual(expense.details['total_cost'], 2700.0)
        self.assertEqual(expense.amount, Decimal('2700.00'))

    def test_save_recomputes_on_update(self):
        expense = Expense.objects.create(
            user=self.user,
            crop=self.crop,
            category='Labour',
            record_type='labour_daily',
            details={'task': 'Sowing', 'number_of_people': 2, 'days': 1, 'daily_rate': 300}
        )
        expense.details['days'] = 3
        expense.save()

        expense.refresh_from_db()
        self.assertEqual(expense.details['total_cost'], 1800.0)
        self.assertEqual(expense.amount, Decimal('1800.00'))

    def test_kind_must_match_category(self):
        with self.assertRaises(ValidationError):
            Expense.objects.create(
                user=self.user,
                crop=self.crop,
                category='Seed',
                record_type='fertilizer',
                details={'product_name': 'Urea', 'number_of_bags': 2, 'total_cost': 600}
            )

    def test_income_without_crop(self):
        income = Income.objects.create(
            user=self.user,
            category='Subsidy',
            record_type='subsidy',
            details={'scheme_type': 'PM-KISAN', 'amount': 2000}
        )
        self.assertIsNone(income.crop_id)
        self.assertEqual(income.amount, Decimal('2000.00'))


class ExpenseAPITestCase(APITestCase):
    """Test expense endpoints"""

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(phone_number='9876543210')
        self.other = User.objects.create_user(phone_number='9123456780')
        self.client.force_authenticate(user=self.user)

        self.crop = make_crop(self.user)
        self.list_url = reverse('finance:expense_list')

    def seed_payload(self, **overrides):
        data = {
            'crop': self.crop.id,
            'category': 'Seed',
            'date': '2025-06-20',
            'seed': {'seed_type': 'Hybrid', 'quantity_kg': 4, 'total_cost': 1000, 'rate_per_kg': 1},
        }
        data.update(overrides)
        return data

    def test_create_seed_expense(self):
        response = self.client.post(self.list_url, self.seed_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data['data']
        self.assertEqual(data['record_type'], 'seed')
        self.assertEqual(data['details']['rate_per_kg'], 250.0)
        self.assertEqual(Decimal(str(data['amount'])), Decimal('1000.00'))

        expense = Expense.objects.get()
        self.assertEqual(expense.user, self.user)

    def test_create_labour_daily(self):
        payload = {
            'crop': self.crop.id,
            'category': 'Labour',
            'labour_daily': {'task': 'Weeding', 'number_of_people': 5, 'days': 2, 'daily_rate': 300},
        }
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['details']['total_cost'], 3000.0)

    def test_create_requires_crop_and_category(self):
        response = self.client.post(self.list_url, {'seed': {}}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('crop', response.data['errors'])
        self.assertIn('category', response.data['errors'])

    def test_create_with_mismatched_sub_record(self):
        payload = self.seed_payload()
        payload['machinery'] = payload.pop('seed')
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Expense.objects.exists())

    def test_create_with_two_sub_records(self):
        payload = self.seed_payload(
            fertilizer={'product_name': 'Urea', 'number_of_bags': 2, 'total_cost': 600}
        )
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_without_sub_record(self):
        payload = self.seed_payload()
        payload.pop('seed')
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_rejects_invalid_sub_fields(self):
        payload = self.seed_payload(seed={'seed_type': 'Magic', 'quantity_kg': -1, 'total_cost': 0})
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        errors = response.data['errors']['seed']
        self.assertIn('seed_type', errors)
        self.assertIn('quantity_kg', errors)
        self.assertIn('total_cost', errors)

    def test_create_with_oversized_total(self):
        payload = {
            'crop': self.crop.id,
            'category': 'Labour',
            'labour_daily': {
                'task': 'Weeding', 'number_of_people': 100000, 'days': 100000, 'daily_rate': 100000
            },
        }
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('details', response.data['errors'])
        self.assertFalse(Expense.objects.exists())

    def test_create_for_another_users_crop(self):
        foreign_crop = make_crop(self.other)
        response = self.client.post(
            self.list_url,
            self.seed_payload(crop=foreign_crop.id),
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('crop', response.data['errors'])

    def test_list_filters(self):
        other_crop = make_crop(self.user, crop_name='Groundnut')
        self.client.post(self.list_url, self.seed_payload(), format='json')
        self.client.post(self.list_url, self.seed_payload(crop=other_crop.id), format='json')
        self.client.post(
            self.list_url,
            self.seed_payload(date='2024-05-01'),
            format='json'
        )

        response = self.client.get(self.list_url, {'crop': other_crop.id})
        self.assertEqual(response.data['pagination']['total'], 1)

        response = self.client.get(self.list_url, {'year': 2025})
        self.assertEqual(response.data['pagination']['total'], 2)

        response = self.client.get(self.list_url, {'category': 'Labour'})
        self.assertEqual(response.data['pagination']['total'], 0)

    def test_list_pagination(self):
        for _ in range(3):
            self.client.post(self.list_url, self.seed_payload(), format='json')

        response = self.client.get(self.list_url, {'page': 2, 'limit': 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['data']), 1)
        self.assertEqual(response.data['pagination'], {
            'total': 3, 'page': 2, 'limit': 2, 'total_pages': 2
        })

    def test_list_only_own_rows(self):
        foreign_crop = make_crop(self.other)
        Expense.objects.create(
            user=self.other,
            crop=foreign_crop,
            category='Pesticide',
            record_type='pesticide',
            details={'pesticide_category': 'Herbicide', 'dosage_ml': 100, 'cost': 450}
        )

        response = self.client.get(self.list_url)
        self.assertEqual(response.data['pagination']['total'], 0)

    def test_update_recomputes_totals(self):
        created = self.client.post(self.list_url, self.seed_payload(), format='json').data['data']
        url = reverse('finance:expense_detail', args=[created['id']])

        response = self.client.patch(url, {'seed': {'total_cost': 2000}}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['details']['rate_per_kg'], 500.0)
        self.assertEqual(data['details']['seed_type'], 'Hybrid')
        self.assertEqual(Expense.objects.get().amount, Decimal('2000.00'))

    def test_update_category_without_sub_record(self):
        created = self.client.post(self.list_url, self.seed_payload(), format='json').data['data']
        url = reverse('finance:expense_detail', args=[created['id']])

        response = self.client.patch(url, {'category': 'Labour'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Expense.objects.get().category, 'Seed')

    def test_update_no_valid_fields(self):
        created = self.client.post(self.list_url, self.seed_payload(), format='json').data['data']
        url = reverse('finance:expense_detail', args=[created['id']])

        response = self.client.put(url, {'amount': 1}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_get_and_delete(self):
        created = self.client.post(self.list_url, self.seed_payload(), format='json').data['data']
        url = reverse('finance:expense_detail', args=[created['id']])

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['id'], created['id'])

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Expense deleted successfully.')

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'Expense not found.')

    def test_other_users_expense_not_found(self):
        foreign_crop = make_crop(self.other)
        expense = Expense.objects.create(
            user=self.other,
            crop=foreign_crop,
            category='Fertilizer',
            record_type='fertilizer',
            details={'product_name': 'DAP', 'number_of_bags': 1, 'total_cost': 1350}
        )

        response = self.client.delete(reverse('finance:expense_detail', args=[expense.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Expense.objects.filter(id=expense.id).exists())


class IncomeAPITestCase(APITestCase):
    """Test income endpoints"""

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(phone_number='9876543210')
        self.client.force_authenticate(user=self.user)

        self.crop = make_crop(self.user)
        self.list_url = reverse('finance:income_list')
        self.summary_url = reverse('finance:income_summary')

    def test_create_crop_sale(self):
        payload = {
            'crop': self.crop.id,
            'category': 'Crop Sale',
            'date': '2025-11-02',
            'crop_sale': {
                'crop_name': 'Cotton',
                'quantity_kg': 100,
                'price_per_kg': 20,
                'buyer_name': 'Shah Traders',
            },
        }
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        details = response.data['data']['details']
        self.assertEqual(details['total_amount'], 2000.0)
        self.assertEqual(details['market_name'], '')

    def test_create_subsidy_without_crop(self):
        payload = {
            'category': 'Subsidy',
            'subsidy': {'scheme_type': 'PM-KISAN', 'amount': 2000},
        }
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data['data']['crop'])

    def test_create_rental_income(self):
        payload = {
            'category': 'Rental Income',
            'rental_income': {'asset_type': 'Tractor', 'hours_or_days': 5, 'rate_per_unit': 700},
        }
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Income.objects.get().amount, Decimal('3500.00'))

    def test_list_newest_date_first(self):
        for day in (1, 15, 7):
            self.client.post(self.list_url, {
                'category': 'Other',
                'date': f'2025-03-{day:02d}',
                'other_income': {'source': 'Dairy', 'amount': 100 * day},
            }, format='json')

        response = self.client.get(self.list_url)

        dates = [row['date'] for row in response.data['data']]
        self.assertEqual(dates, ['2025-03-15', '2025-03-07', '2025-03-01'])

    def test_summary_by_category(self):
        self.client.post(self.list_url, {
            'category': 'Subsidy',
            'date': '2025-04-01',
            'subsidy': {'scheme_type': 'PM-KISAN', 'amount': 2000},
        }, format='json')
        self.client.post(self.list_url, {
            'category': 'Subsidy',
            'date': '2025-08-01',
            'subsidy': {'scheme_type': 'PM-KISAN', 'amount': 2000},
        }, format='json')
        self.client.post(self.list_url, {
            'crop': self.crop.id,
            'category': 'Crop Sale',
            'date': '2025-11-01',
            'crop_sale': {'crop_name': 'Cotton', 'quantity_kg': 500, 'price_per_kg': 60},
        }, format='json')
        self.client.post(self.list_url, {
            'category': 'Other',
            'date': '2024-12-01',
            'other_income': {'source': 'Dairy', 'amount': 900},
        }, format='json')

        response = self.client.get(self.summary_url, {'year': 2025})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['year'], 2025)
        self.assertEqual([row['category'] for row in data['summary']], ['Crop Sale', 'Subsidy'])
        self.assertEqual(data['summary'][1]['count'], 2)
        self.assertEqual(data['grand_total'], Decimal('34000.00'))

    def test_summary_all_years(self):
        summary = IncomeSummaryService.by_category(self.user)

        self.assertEqual(summary['year'], 'all')
        self.assertEqual(summary['summary'], [])
        self.assertEqual(summary['grand_total'], Decimal('0.00'))

    def test_summary_invalid_year(self):
        response = self.client.get(self.summary_url, {'year': 'abc'})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_changes_kind(self):
        created = self.client.post(self.list_url, {
            'category': 'Subsidy',
            'subsidy': {'scheme_type': 'Seed Subsidy', 'amount': 1500},
        }, format='json').data['data']
        url = reverse('finance:income_detail', args=[created['id']])

        response = self.client.put(url, {
            'category': 'Other',
            'other_income': {'source': 'Labour Work', 'amount': 800},
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        income = Income.objects.get()
        self.assertEqual(income.record_type, 'other_income')
        self.assertEqual(income.amount, Decimal('800.00'))
        self.assertNotIn('scheme_type', income.details)

    def test_delete_income(self):
        income = Income.objects.create(
            user=self.user,
            category='Other',
            date=date(2025, 1, 5),
            record_type='other_income',
            details={'source': 'Dairy', 'amount': 300}
        )

        response = self.client.delete(reverse('finance:income_detail', args=[income.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Income.objects.exists())
