# apps/finance/views.py

import logging

from rest_framework import status, generics, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from core.mixins.owner_mixin import OwnerQuerysetMixin
from core.mixins.patchable_mixin import PatchableFieldsMixin
from core.permissions import IsOwner
from core.utils import parse_year_param
from .filters import ExpenseFilter, IncomeFilter
from .models import Expense, Income
from .serializers import (
    ExpenseSerializer,
    IncomeSerializer,
    EXPENSE_DETAIL_SERIALIZERS,
    INCOME_DETAIL_SERIALIZERS
)
from .services.income_summary import IncomeSummaryService

logger = logging.getLogger(__name__)

RECORD_FIELDS = ('crop', 'category', 'date', 'notes')


class RecordListCreateView(OwnerQuerysetMixin, generics.ListCreateAPIView):
    """List and create rows owned by the requesting user"""
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return super().get_queryset().select_related('user')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)

        record = serializer.instance
        logger.info(
            f"{record.__class__.__name__} {record.id} created for user {request.user.id}: "
            f"{record.category} {record.amount}"
        )

        return Response({
            'success': True,
            'data': serializer.data
        }, status=status.HTTP_201_CREATED)


class RecordDetailView(OwnerQuerysetMixin, PatchableFieldsMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    Retrieve, update or delete a row.

    Updates go through ``Model.save()`` so derived totals are recomputed.
    """
    permission_classes = [permissions.IsAuthenticated, IsOwner]
    deleted_message = 'Deleted successfully.'

    def retrieve(self, request, *args, **kwargs):
        record = self.get_object()
        return Response({
            'success': True,
            'data': self.get_serializer(record).data
        })

    def update(self, request, *args, **kwargs):
        updates = self.get_patch_data(request.data)
        record = self.get_object()

        serializer = self.get_serializer(record, data=updates, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)

        return Response({
            'success': True,
            'data': serializer.data
        })

    def destroy(self, request, *args, **kwargs):
        record = self.get_object()
        record.delete()

        return Response({
            'success': True,
            'message': self.deleted_message
        }, status=status.HTTP_200_OK)


# ----------------------------
# Expenses
# ----------------------------
class ExpenseListCreateView(RecordListCreateView):
    """
    GET /api/v1/expenses/
    POST /api/v1/expenses/

    Filters: crop, category, year
    """
    queryset = Expense.objects.all()
    serializer_class = ExpenseSerializer
    filterset_class = ExpenseFilter


class ExpenseDetailView(RecordDetailView):
    """
    GET/PUT/PATCH/DELETE /api/v1/expenses/{id}/
    """
    queryset = Expense.objects.all()
    serializer_class = ExpenseSerializer
    not_found_message = 'Expense not found.'
    deleted_message = 'Expense deleted successfully.'
    patchable_fields = frozenset(RECORD_FIELDS + tuple(EXPENSE_DETAIL_SERIALIZERS))


# ----------------------------
# Income
# ----------------------------
class IncomeListCreateView(RecordListCreateView):
    """
    GET /api/v1/income/
    POST /api/v1/income/

    Filters: crop, category, year
    """
    queryset = Income.objects.all()
    serializer_class = IncomeSerializer
    filterset_class = IncomeFilter


class IncomeDetailView(RecordDetailView):
    """
    GET/PUT/PATCH/DELETE /api/v1/income/{id}/
    """
    queryset = Income.objects.all()
    serializer_class = IncomeSerializer
    not_found_message = 'Income not found.'
    deleted_message = 'Income deleted successfully.'
    patchable_fields = frozenset(RECORD_FIELDS + tuple(INCOME_DETAIL_SERIALIZERS))


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def income_summary(request):
    """
    GET /api/v1/income/summary/?year=2025

    Total income grouped by category
    """
    try:
        year = parse_year_param(request)
    except ValueError:
        return Response({
            'success': False,
            'message': 'year must be a valid year'
        }, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'success': True,
        'data': IncomeSummaryService.by_category(request.user, year)
    })
