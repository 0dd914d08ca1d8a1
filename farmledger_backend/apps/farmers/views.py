# apps/farmers/views.py

from rest_framework import status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from core.mixins.patchable_mixin import PatchableFieldsMixin
from .serializers import (
    PROFILE_FIELDS,
    FarmerProfileSerializer,
    FarmerProfileCreateSerializer,
    FarmerProfileUpdateSerializer
)
from .services import FarmerProfileService


def profile_not_found():
    return Response({
        'success': False,
        'message': 'Profile not found'
    }, status=status.HTTP_404_NOT_FOUND)


class ProfileCompleteView(APIView):
    """
    POST /api/v1/profile/complete/

    Create the farmer profile on first login
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = FarmerProfileCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            profile = FarmerProfileService.complete_profile(
                request.user,
                serializer.validated_data
            )
        except ValueError as e:
            return Response({
                'success': False,
                'message': str(e)
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'success': True,
            'message': 'Profile saved',
            'data': FarmerProfileSerializer(profile).data
        }, status=status.HTTP_201_CREATED)


class MyProfileView(APIView):
    """
    GET /api/v1/profile/me/

    Get current user's farmer profile
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        profile = FarmerProfileService.get_profile(request.user)
        if profile is None:
            return profile_not_found()

        return Response({
            'success': True,
            'data': FarmerProfileSerializer(profile).data
        }, status=status.HTTP_200_OK)


class ProfileUpdateView(PatchableFieldsMixin, APIView):
    """
    PUT/PATCH /api/v1/profile/update/

    Update allow-listed profile fields
    """
    permission_classes = [permissions.IsAuthenticated]
    patchable_fields = frozenset(PROFILE_FIELDS)

    def put(self, request):
        profile = FarmerProfileService.get_profile(request.user)
        if profile is None:
            return profile_not_found()

        updates = self.get_patch_data(request.data)
        serializer = FarmerProfileUpdateSerializer(profile, data=updates, partial=True)
        serializer.is_valid(raise_exception=True)

        profile = FarmerProfileService.update_profile(profile, serializer.validated_data)

        return Response({
            'success': True,
            'message': 'Profile updated',
            'data': FarmerProfileSerializer(profile).data
        }, status=status.HTTP_200_OK)

    def patch(self, request):
        return self.put(request)
