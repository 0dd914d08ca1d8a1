# apps/crops/views.py

import logging

from django.utils import timezone
from rest_framework import status, generics, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from core.mixins.owner_mixin import OwnerQuerysetMixin
from core.permissions import IsOwner
from core.utils import parse_year_param
from core.mixins.patchable_mixin import PatchableFieldsMixin
from .filters import CropFilter
from .models import Crop
from .serializers import (
    CROP_UPDATABLE_FIELDS,
    CropSerializer,
    CropStatusSerializer,
    CropHarvestSerializer
)
from .services import FinancialReportService, CropYearService

logger = logging.getLogger(__name__)


class CropQuerysetMixin(OwnerQuerysetMixin):
    queryset = Crop.objects.all()
    serializer_class = CropSerializer
    permission_classes = [permissions.IsAuthenticated, IsOwner]
    not_found_message = 'Crop not found.'


class CropListCreateView(CropQuerysetMixin, generics.ListCreateAPIView):
    """
    GET /api/v1/crops/
    POST /api/v1/crops/

    List crops (filters: season, status, year) or create a crop
    """
    filterset_class = CropFilter

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)

        crop = serializer.instance
        logger.info(f"Crop {crop.id} created for user {request.user.id}")

        return Response({
            'success': True,
            'data': serializer.data
        }, status=status.HTTP_201_CREATED)


class CropDetailView(CropQuerysetMixin, PatchableFieldsMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PUT/PATCH/DELETE /api/v1/crops/{id}/
    """
    patchable_fields = frozenset(CROP_UPDATABLE_FIELDS)

    def retrieve(self, request, *args, **kwargs):
        crop = self.get_object()
        return Response({
            'success': True,
            'data': self.get_serializer(crop).data
        })

    def update(self, request, *args, **kwargs):
        updates = self.get_patch_data(request.data)
        crop = self.get_object()

        serializer = self.get_serializer(crop, data=updates, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)

        return Response({
            'success': True,
            'data': serializer.data
        })

    def destroy(self, request, *args, **kwargs):
        crop = self.get_object()
        crop_id = crop.id

        # Expense and income rows keep their crop reference
        crop.delete()
        logger.info(f"Crop {crop_id} deleted by user {request.user.id}")

        return Response({
            'success': True,
            'message': 'Crop deleted successfully.'
        }, status=status.HTTP_200_OK)


class CropStatusView(CropQuerysetMixin, generics.GenericAPIView):
    """
    PATCH /api/v1/crops/{id}/status/

    Update status only (quick action)
    """

    def patch(self, request, *args, **kwargs):
        serializer = CropStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        crop = self.get_object()
        crop.set_status(serializer.validated_data['status'])

        return Response({
            'success': True,
            'data': CropSerializer(crop).data
        })


class CropHarvestView(CropQuerysetMixin, generics.GenericAPIView):
    """
    PATCH /api/v1/crops/{id}/harvest/

    Mark a crop harvested; the date defaults to today
    """

    def patch(self, request, *args, **kwargs):
        serializer = CropHarvestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        crop = self.get_object()
        harvest_date = serializer.validated_data.get('harvest_date') or timezone.localdate()

        if crop.sowing_date and harvest_date < crop.sowing_date:
            return Response({
                'success': False,
                'message': 'Harvest date cannot be before sowing date.'
            }, status=status.HTTP_400_BAD_REQUEST)

        crop.mark_harvested(harvest_date)

        return Response({
            'success': True,
            'data': CropSerializer(crop).data
        })


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def crop_years(request):
    """
    GET /api/v1/crops/years/

    Years the user has crops in, newest first
    """
    return Response({
        'success': True,
        'data': CropYearService.years_for(request.user)
    })


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def crop_report(request):
    """
    GET /api/v1/crops/report/?year=2025

    Yearly profit/loss per crop with season breakdown
    """
    try:
        year = parse_year_param(request)
    except ValueError:
        return Response({
            'success': False,
            'message': 'year must be a valid year'
        }, status=status.HTTP_400_BAD_REQUEST)

    report = FinancialReportService.yearly_report(request.user, year)

    return Response({
        'success': True,
        'data': report
    })
