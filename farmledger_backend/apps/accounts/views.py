# apps/accounts/views.py

import logging

from rest_framework import status, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.views import APIView

from .services import AuthService
from .serializers import (
    UserSerializer,
    SendCodeSerializer,
    VerifyCodeSerializer,
    ConsentSerializer
)

logger = logging.getLogger(__name__)


# ----------------------------
# OTP Login
# ----------------------------
class SendCodeView(APIView):
    """
    POST /api/v1/auth/send-code/
    Ask the OTP provider to send a login code
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = SendCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        session_id = AuthService.send_login_code(
            serializer.validated_data['phone_number']
        )

        return Response({
            'success': True,
            'message': 'OTP sent successfully',
            'data': {'session_id': session_id}
        }, status=status.HTTP_200_OK)


class VerifyCodeView(APIView):
    """
    POST /api/v1/auth/verify-code/
    Verify the login code and return a session token
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = VerifyCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = AuthService.verify_login_code(
            phone_number=data['phone_number'],
            otp=data['otp'],
            session_id=data['session_id']
        )

        if result is None:
            return Response({
                'success': False,
                'message': 'Invalid or expired OTP'
            }, status=status.HTTP_400_BAD_REQUEST)

        user = result.pop('user')

        return Response({
            'success': True,
            'message': 'Login successful',
            'data': {
                **result,
                'user': UserSerializer(user).data
            }
        }, status=status.HTTP_200_OK)


# ----------------------------
# Consent & Session
# ----------------------------
class ConsentView(APIView):
    """
    POST /api/v1/auth/consent/
    Record the one-time analytics consent answer
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = ConsentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = AuthService.record_consent(
                request.user,
                serializer.validated_data['consent']
            )
        except ValueError as e:
            return Response({
                'success': False,
                'message': str(e)
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'success': True,
            'message': 'Consent saved',
            'data': {'analytics_consent': user.analytics_consent}
        }, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def current_user(request):
    """
    GET /api/v1/auth/me/
    Return the authenticated user with its gating flags
    """
    return Response({
        'success': True,
        'data': UserSerializer(request.user).data
    }, status=status.HTTP_200_OK)
