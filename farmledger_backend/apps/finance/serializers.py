# apps/finance/serializers.py

from rest_framework import serializers
from apps.crops.models import Crop
from .models import Expense, Income


# ----------------------------
# Sub-record payloads
# ----------------------------
class SeedDetailsSerializer(serializers.Serializer):
    seed_type = serializers.ChoiceField(choices=['Company Brand', 'Local/Desi', 'Hybrid'])
    quantity_kg = serializers.FloatField(min_value=0)
    total_cost = serializers.FloatField(min_value=1)


class FertilizerDetailsSerializer(serializers.Serializer):
    product_name = serializers.ChoiceField(
        choices=['Urea', 'DAP', 'NPK', 'Organic', 'Sulphur', 'Micronutrients']
    )
    number_of_bags = serializers.FloatField(min_value=0)
    total_cost = serializers.FloatField(min_value=1)


class PesticideDetailsSerializer(serializers.Serializer):
    pesticide_category = serializers.ChoiceField(
        choices=['Insecticide', 'Fungicide', 'Herbicide', 'Growth Booster']
    )
    dosage_ml = serializers.FloatField(min_value=0)
    cost = serializers.FloatField(min_value=1)


class LabourDailyDetailsSerializer(serializers.Serializer):
    task = serializers.ChoiceField(
        choices=['Weeding', 'Sowing', 'Spraying', 'Harvesting', 'Irrigation']
    )
    number_of_people = serializers.IntegerField(min_value=1)
    days = serializers.FloatField(min_value=1)
    daily_rate = serializers.FloatField(min_value=1)


class LabourContractDetailsSerializer(serializers.Serializer):
    advance_reason = serializers.ChoiceField(
        choices=['Medical', 'Grocery', 'Mobile Recharge', 'Festival', 'Loan', 'Other']
    )
    amount_given = serializers.FloatField(min_value=1)


class MachineryDetailsSerializer(serializers.Serializer):
    implement = serializers.ChoiceField(
        choices=[
            'Rotavator',
            'Plough',
            'Sowing Machine',
            'Thresher',
            'Tractor Rental',
            'બલૂન (Baluun)',
            'રેપ (Rap)',
        ]
    )
    is_contract = serializers.BooleanField(default=False)
    hours_or_acres = serializers.FloatField(min_value=0)
    rate = serializers.FloatField(min_value=1)


class CropSaleDetailsSerializer(serializers.Serializer):
    crop_name = serializers.CharField(max_length=100)
    quantity_kg = serializers.FloatField(min_value=0)
    price_per_kg = serializers.FloatField(min_value=0)
    buyer_name = serializers.CharField(required=False, allow_blank=True, default='')
    market_name = serializers.CharField(required=False, allow_blank=True, default='')


class SubsidyDetailsSerializer(serializers.Serializer):
    scheme_type = serializers.ChoiceField(
        choices=[
            'PM-KISAN',
            'Fasal Bima (Crop Insurance)',
            'Seed Subsidy',
            'Fertilizer Subsidy',
            'Irrigation Subsidy',
            'Equipment Subsidy',
            'Other Government Scheme',
        ]
    )
    amount = serializers.FloatField(min_value=1)
    reference_number = serializers.CharField(required=False, allow_blank=True, default='')


class RentalIncomeDetailsSerializer(serializers.Serializer):
    asset_type = serializers.ChoiceField(
        choices=['Tractor', 'Rotavator', 'Thresher', 'Land', 'Water Pump', 'Other Equipment']
    )
    rented_to_name = serializers.CharField(required=False, allow_blank=True, default='')
    hours_or_days = serializers.FloatField(min_value=0)
    rate_per_unit = serializers.FloatField(min_value=1)


class OtherIncomeDetailsSerializer(serializers.Serializer):
    source = serializers.ChoiceField(
        choices=['Labour Work', 'Animal Husbandry', 'Dairy', 'Part-time Work', 'Loan Received', 'Other']
    )
    amount = serializers.FloatField(min_value=1)
    description = serializers.CharField(required=False, allow_blank=True, default='')


EXPENSE_DETAIL_SERIALIZERS = {
    'seed': SeedDetailsSerializer,
    'fertilizer': FertilizerDetailsSerializer,
    'pesticide': PesticideDetailsSerializer,
    'labour_daily': LabourDailyDetailsSerializer,
    'labour_contract': LabourContractDetailsSerializer,
    'machinery': MachineryDetailsSerializer,
}

INCOME_DETAIL_SERIALIZERS = {
    'crop_sale': CropSaleDetailsSerializer,
    'subsidy': SubsidyDetailsSerializer,
    'rental_income': RentalIncomeDetailsSerializer,
    'other_income': OtherIncomeDetailsSerializer,
}


# ----------------------------
# Rows
# ----------------------------
class OwnedCropField(serializers.PrimaryKeyRelatedField):
    """Crop reference limited to the requesting user's crops"""

    default_error_messages = {
        'does_not_exist': 'Crop not found.',
        'incorrect_type': 'Crop id must be an integer.',
    }

    def get_queryset(self):
        request = self.context.get('request')
        if request is None:
            return Crop.objects.none()
        return Crop.objects.filter(user=request.user)


class FinancialRecordSerializer(serializers.ModelSerializer):
    """
    Base serializer for expense and income rows.

    Requests carry ``category`` plus exactly one sub-record key holding its
    raw fields; responses expose ``record_type``, ``details`` and ``amount``.
    """

    detail_serializers = {}

    crop = OwnedCropField()

    class Meta:
        fields = [
            'id',
            'crop',
            'category',
            'date',
            'notes',
            'record_type',
            'details',
            'amount',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'record_type', 'details', 'amount', 'created_at', 'updated_at']

    def _validate_sub_record(self, kind, raw, base):
        if not isinstance(raw, dict):
            raise serializers.ValidationError({kind: [f"{kind} must be an object."]})

        sub_serializer = self.detail_serializers[kind](data={**base, **raw})
        if not sub_serializer.is_valid():
            raise serializers.ValidationError({kind: sub_serializer.errors})
        return dict(sub_serializer.validated_data)

    def validate(self, attrs):
        instance = self.instance
        initial = self.initial_data if isinstance(self.initial_data, dict) else {}
        model = self.Meta.model

        category = attrs.get('category', getattr(instance, 'category', None))
        allowed = model.CATEGORY_KINDS.get(category, ())
        supplied = [kind for kind in self.detail_serializers if initial.get(kind) is not None]

        if len(supplied) > 1:
            raise serializers.ValidationError(
                f"Provide exactly one sub-record, got: {', '.join(supplied)}"
            )

        if not supplied:
            if instance is None:
                raise serializers.ValidationError(
                    f"{category} requires a {' or '.join(allowed)} record."
                )
            if instance.record_type not in allowed:
                raise serializers.ValidationError(
                    f"Changing category to {category} requires a {' or '.join(allowed)} record."
                )
            return attrs

        kind = supplied[0]
        if kind not in allowed:
            raise serializers.ValidationError({
                kind: [f"{category} requires a {' or '.join(allowed)} record."]
            })

        # Updates to the same kind may send only the fields that changed
        base = {}
        if instance is not None and instance.record_type == kind:
            base = dict(instance.details)

        attrs['record_type'] = kind
        attrs['details'] = self._validate_sub_record(kind, initial[kind], base)
        return attrs


class ExpenseSerializer(FinancialRecordSerializer):
    """Serializer for Expense model"""

    detail_serializers = EXPENSE_DETAIL_SERIALIZERS

    class Meta(FinancialRecordSerializer.Meta):
        model = Expense


class IncomeSerializer(FinancialRecordSerializer):
    """Serializer for Income model"""

    detail_serializers = INCOME_DETAIL_SERIALIZERS

    crop = OwnedCropField(required=False, allow_null=True)

    class Meta(FinancialRecordSerializer.Meta):
        model = Income
