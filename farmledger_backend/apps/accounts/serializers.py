# apps/accounts/serializers.py

from rest_framework import serializers
from .models import User


def validate_phone(value):
    """Normalize and validate a 10-digit mobile number"""
    cleaned = User.objects.normalize_phone_number(value)

    if len(cleaned) != 10 or not cleaned.isdigit():
        raise serializers.ValidationError("Valid 10-digit phone number required")

    return cleaned


class UserSerializer(serializers.ModelSerializer):
    """Serializer for User model"""

    consent_given = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'phone_number',
            'role',
            'is_profile_completed',
            'analytics_consent',
            'consent_given',
            'created_at',
            'updated_at'
        ]
        read_only_fields = fields


class SendCodeSerializer(serializers.Serializer):
    """Serializer for requesting an OTP"""

    phone_number = serializers.CharField(required=True)

    def validate_phone_number(self, value):
        return validate_phone(value)


class VerifyCodeSerializer(serializers.Serializer):
    """Serializer for verifying an OTP"""

    phone_number = serializers.CharField(required=True)
    otp = serializers.CharField(required=True, min_length=4, max_length=8)
    session_id = serializers.CharField(required=True)

    def validate_phone_number(self, value):
        return validate_phone(value)

    def validate_otp(self, value):
        if not value.isdigit():
            raise serializers.ValidationError("OTP must contain digits only")
        return value


class ConsentSerializer(serializers.Serializer):
    """Serializer for the one-time analytics consent answer"""

    consent = serializers.BooleanField(required=True)

    def validate_consent(self, value):
        # Strings like "true" are rejected; only JSON booleans are accepted
        if not isinstance(self.initial_data.get('consent'), bool):
            raise serializers.ValidationError('consent must be true or false')
        return value
