# core/exceptions.py

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class NoUpdatableFields(exceptions.APIException):
    """Raised when an update request touches none of the patchable fields"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'No valid fields to update.'
    default_code = 'no_updatable_fields'


class OTPProviderError(exceptions.APIException):
    """Raised when the OTP provider cannot be reached or rejects a request"""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'OTP provider unavailable.'
    default_code = 'otp_provider_error'


def _first_message(data):
    """Flatten DRF error data into a single human-readable message"""
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ''

    if isinstance(data, dict):
        if 'detail' in data:
            return _first_message(data['detail'])
        for field, errors in data.items():
            message = _first_message(errors)
            if field in ('non_field_errors', '__all__'):
                return message
            return f'{field}: {message}'
        return ''

    return str(data)


def envelope_exception_handler(exc, context):
    """
    Convert every error raised by a view into the uniform
    ``{success: false, message, errors?}`` envelope.
    """
    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, 'error_dict') else exc.messages
        exc = exceptions.ValidationError(detail=detail)
    elif isinstance(exc, IntegrityError):
        exc = exceptions.ValidationError(detail={'non_field_errors': [str(exc)]})

    response = exception_handler(exc, context)

    if response is None:
        set_rollback()
        view = context.get('view')
        logger.exception(
            f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}"
        )
        return Response(
            {'success': False, 'message': str(exc) or 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    payload = {
        'success': False,
        'message': _first_message(response.data),
    }
    if isinstance(exc, exceptions.ValidationError):
        payload['errors'] = response.data

    response.data = payload
    return response
