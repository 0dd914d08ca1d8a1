# core/pagination.py

import math

from rest_framework.pagination import BasePagination
from rest_framework.response import Response


class StandardResultsSetPagination(BasePagination):
    """
    Offset/limit pagination driven by ``page`` and ``limit`` query params.

    Pages past the end return an empty list rather than a 404, and the
    response carries the uniform ``{success, data, pagination}`` envelope.
    """

    page_query_param = 'page'
    limit_query_param = 'limit'
    default_limit = 20
    max_limit = 100

    def _positive_int(self, raw, default, cutoff=None):
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return default
        if value < 1:
            return default
        if cutoff:
            return min(value, cutoff)
        return value

    def paginate_queryset(self, queryset, request, view=None):
        self.page = self._positive_int(
            request.query_params.get(self.page_query_param), 1
        )
        self.limit = self._positive_int(
            request.query_params.get(self.limit_query_param),
            self.default_limit,
            cutoff=self.max_limit,
        )
        self.total = queryset.count()

        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_pagination_data(self):
        return {
            'total': self.total,
            'page': self.page,
            'limit': self.limit,
            'total_pages': math.ceil(self.total / self.limit),
        }

    def get_paginated_response(self, data):
        return Response({
            'success': True,
            'data': data,
            'pagination': self.get_pagination_data(),
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'success': {'type': 'boolean'},
                'data': schema,
                'pagination': {
                    'type': 'object',
                    'properties': {
                        'total': {'type': 'integer'},
                        'page': {'type': 'integer'},
                        'limit': {'type': 'integer'},
                        'total_pages': {'type': 'integer'},
                    },
                },
            },
        }
