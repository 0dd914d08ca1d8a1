# apps/farmers/serializers.py

from rest_framework import serializers
from .models import FarmerProfile


PROFILE_FIELDS = [
    'name',
    'district',
    'taluka',
    'village',
    'total_land_value',
    'total_land_unit',
    'water_source',
    'tractor_available',
    'labour_type',
]


class FarmerProfileSerializer(serializers.ModelSerializer):
    """Read serializer for FarmerProfile model"""

    phone_number = serializers.CharField(source='user.phone_number', read_only=True)

    class Meta:
        model = FarmerProfile
        fields = ['id', 'phone_number'] + PROFILE_FIELDS + ['created_at', 'updated_at']
        read_only_fields = fields


class FarmerProfileCreateSerializer(serializers.ModelSerializer):
    """Serializer for completing the farmer profile"""

    class Meta:
        model = FarmerProfile
        fields = PROFILE_FIELDS

    def _strip(self, value, label):
        value = value.strip()
        if not value:
            raise serializers.ValidationError(f"{label} is required.")
        return value

    def validate_name(self, value):
        return self._strip(value, 'Name')

    def validate_taluka(self, value):
        return self._strip(value, 'Taluka')

    def validate_village(self, value):
        return self._strip(value, 'Village')

    def validate_total_land_value(self, value):
        if value < 0:
            raise serializers.ValidationError("Land value cannot be negative.")
        return value


class FarmerProfileUpdateSerializer(FarmerProfileCreateSerializer):
    """Serializer for partial profile updates"""

    class Meta(FarmerProfileCreateSerializer.Meta):
        extra_kwargs = {field: {'required': False} for field in PROFILE_FIELDS}
