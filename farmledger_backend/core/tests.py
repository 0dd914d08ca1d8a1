# core/tests.py

from django.core.exceptions import ValidationError as DjangoValidationError
from django.test import TestCase
from rest_framework import exceptions
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from apps.accounts.models import User
from core.exceptions import NoUpdatableFields, OTPProviderError, envelope_exception_handler
from core.mixins.patchable_mixin import PatchableFieldsMixin
from core.pagination import StandardResultsSetPagination


class PaginationTestCase(TestCase):
    """Test page/limit pagination"""

    def setUp(self):
        self.factory = APIRequestFactory()
        for i in range(5):
            User.objects.create_user(phone_number=f'98765432{i:02d}')
        self.queryset = User.objects.order_by('id')

    def paginate(self, **params):
        paginator = StandardResultsSetPagination()
        request = Request(self.factory.get('/', params))
        page = paginator.paginate_queryset(self.queryset, request)
        return paginator, page

    def test_defaults(self):
        paginator, page = self.paginate()

        self.assertEqual(len(page), 5)
        self.assertEqual(paginator.get_pagination_data(), {
            'total': 5, 'page': 1, 'limit': 20, 'total_pages': 1
        })

    def test_limit_capped(self):
        paginator, _page = self.paginate(limit=500)
        self.assertEqual(paginator.limit, 100)

    def test_invalid_values_fall_back(self):
        paginator, _page = self.paginate(page='abc', limit='-3')

        self.assertEqual(paginator.page, 1)
        self.assertEqual(paginator.limit, 20)

    def test_page_past_end_is_empty(self):
        paginator, page = self.paginate(page=4, limit=2)

        self.assertEqual(page, [])
        self.assertEqual(paginator.get_pagination_data()['total_pages'], 3)

    def test_envelope(self):
        paginator, page = self.paginate(limit=2)
        response = paginator.get_paginated_response(['a', 'b'])

        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['data'], ['a', 'b'])
        self.assertEqual(response.data['pagination']['total_pages'], 3)


class EnvelopeExceptionHandlerTestCase(TestCase):
    """Test the uniform error envelope"""

    def test_validation_error(self):
        exc = exceptions.ValidationError({'area': ['Ensure this value is greater than or equal to 0.01.']})
        response = envelope_exception_handler(exc, {})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['message'], 'area: Ensure this value is greater than or equal to 0.01.')
        self.assertIn('area', response.data['errors'])

    def test_django_validation_error(self):
        exc = DjangoValidationError({'record_type': ['Seed requires a seed record, got none']})
        response = envelope_exception_handler(exc, {})

        self.assertEqual(response.status_code, 400)
        self.assertIn('record_type', response.data['errors'])

    def test_no_updatable_fields(self):
        response = envelope_exception_handler(NoUpdatableFields(), {})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'success': False, 'message': 'No valid fields to update.'})

    def test_otp_provider_error(self):
        response = envelope_exception_handler(OTPProviderError(), {})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.data['message'], 'OTP provider unavailable.')

    def test_unhandled_error(self):
        response = envelope_exception_handler(RuntimeError('boom'), {})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {'success': False, 'message': 'boom'})


class PatchableFieldsMixinTestCase(TestCase):

    def test_filters_to_allowed_fields(self):
        mixin = PatchableFieldsMixin()
        mixin.patchable_fields = frozenset({'notes', 'area'})

        self.assertEqual(mixin.get_patch_data({'notes': 'x', 'user': 3}), {'notes': 'x'})

        with self.assertRaises(NoUpdatableFields):
            mixin.get_patch_data({'user': 3})

    def test_rejects_non_object_body(self):
        mixin = PatchableFieldsMixin()
        mixin.patchable_fields = frozenset({'notes'})

        with self.assertRaises(exceptions.ValidationError):
            mixin.get_patch_data([{'notes': 'x'}])
