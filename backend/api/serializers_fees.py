"""Serializers for fee records"""
from rest_framework import serializers

from .domain_fees import Fee, FeeStatus, FeeType


class FeeSerializer(serializers.ModelSerializer):
    """
    Fee record in API shape.
    - ``status`` is derived on save; the only value a client may set is ``paid``
    - ``remaining_amount`` is always computed
    """
    student_name = serializers.SerializerMethodField()
    roll_number = serializers.CharField(source='student.roll_number', read_only=True)
    student_class = serializers.CharField(source='student.student_class', read_only=True)
    section = serializers.CharField(source='student.section', read_only=True)
    recorded_by_username = serializers.CharField(source='recorded_by.username', read_only=True)

    class Meta:
        model = Fee
        fields = [
            'id',
            'student',
            'student_name',
            'roll_number',
            'student_class',
            'section',
            'fee_type',
            'amount',
            'due_date',
            'payment_date',
            'payment_method',
            'transaction_id',
            'status',
            'paid_amount',
            'remaining_amount',
            'arrears',
            'receipt_number',
            'remarks',
            'recorded_by',
            'recorded_by_username',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id', 'remaining_amount', 'recorded_by', 'recorded_by_username',
            'created_at', 'updated_at',
        ]

    def get_student_name(self, obj):
        if obj.student_id is None:
            return None
        return obj.student.full_name

    def validate_status(self, value):
        current = getattr(self.instance, 'status', None)
        if value not in (FeeStatus.PAID, current):
            raise serializers.ValidationError(
                "Status is derived from the paid amount; only 'paid' can be set explicitly."
            )
        return value

    def validate_amount(self, value):
        if value is None or value < 0:
            raise serializers.ValidationError("Amount must be zero or greater.")
        return value

    def validate_paid_amount(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Paid amount cannot be negative.")
        return value


class FeeCreateSerializer(serializers.Serializer):
    """Payload for recording a fee against a student (resolved by the view).

    ``fee_type="all"`` records both the tuition and the exam fee.
    """
    FEE_TYPE_CHOICES = list(FeeType.choices) + [('all', 'All')]

    fee_type = serializers.ChoiceField(choices=FEE_TYPE_CHOICES)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    due_date = serializers.DateField()
    paid_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    arrears = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    status = serializers.ChoiceField(choices=FeeStatus.choices, required=False)
    payment_method = serializers.CharField(required=False, allow_blank=True)
    payment_date = serializers.DateTimeField(required=False, allow_null=True)
    transaction_id = serializers.CharField(required=False, allow_blank=True)
    receipt_number = serializers.CharField(required=False, allow_blank=True)
    remarks = serializers.CharField(required=False, allow_blank=True)

    def validate_status(self, value):
        if value != FeeStatus.PAID:
            raise serializers.ValidationError(
                "Status is derived from the paid amount; only 'paid' can be set explicitly."
            )
        return value

    def validate_payment_method(self, value):
        allowed = {choice for choice, _ in Fee._meta.get_field('payment_method').choices}
        if value and value not in allowed:
            raise serializers.ValidationError(f"'{value}' is not a valid payment method.")
        return value
