# apps/crops/serializers.py

from rest_framework import serializers
from .models import Crop


CROP_UPDATABLE_FIELDS = [
    'season',
    'year',
    'crop_name',
    'crop_emoji',
    'sub_type',
    'batch_label',
    'area',
    'area_unit',
    'sowing_date',
    'harvest_date',
    'status',
    'notes',
]


class CropSerializer(serializers.ModelSerializer):
    """Serializer for Crop model"""

    class Meta:
        model = Crop
        fields = ['id'] + CROP_UPDATABLE_FIELDS + ['created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_crop_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Crop name is required.")
        return value

    def validate_batch_label(self, value):
        return value.strip()

    def validate(self, attrs):
        """Reject a second crop with the same name and batch in one year"""
        request = self.context.get('request')
        instance = self.instance

        crop_name = attrs.get('crop_name', getattr(instance, 'crop_name', None))
        year = attrs.get('year', getattr(instance, 'year', None))
        batch_label = attrs.get('batch_label', getattr(instance, 'batch_label', ''))

        if year is None:
            year = Crop._meta.get_field('year').get_default()

        owner = instance.user if instance else getattr(request, 'user', None)
        if owner is not None:
            duplicates = Crop.objects.filter(
                user=owner,
                crop_name=crop_name,
                year=year,
                batch_label=batch_label or ''
            )
            if instance:
                duplicates = duplicates.exclude(pk=instance.pk)
            if duplicates.exists():
                raise serializers.ValidationError(
                    "A crop with this name and batch label already exists for this year."
                )

        sowing_date = attrs.get('sowing_date', getattr(instance, 'sowing_date', None))
        harvest_date = attrs.get('harvest_date', getattr(instance, 'harvest_date', None))
        if sowing_date and harvest_date and harvest_date < sowing_date:
            raise serializers.ValidationError({
                'harvest_date': "Harvest date cannot be before sowing date."
            })

        return attrs


class CropStatusSerializer(serializers.Serializer):
    """Serializer for the status quick action"""

    status = serializers.ChoiceField(
        choices=Crop.STATUS_CHOICES,
        error_messages={
            'invalid_choice': 'Status must be one of: Active, Harvested, Closed',
            'required': 'Status must be one of: Active, Harvested, Closed',
        }
    )


class CropHarvestSerializer(serializers.Serializer):
    """Serializer for marking a crop harvested"""

    harvest_date = serializers.DateField(required=False, allow_null=True)
