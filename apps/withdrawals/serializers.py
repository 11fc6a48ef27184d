from django.conf import settings
from rest_framework import serializers

from apps.referrals.money import to_major_units
from .models import WithdrawalRequest


class WithdrawalRequestListSerializer(serializers.ModelSerializer):
    """Compact serializer for withdrawal history."""

    class Meta:
        model = WithdrawalRequest
        fields = ['id', 'amount', 'status', 'requested_at']
        read_only_fields = fields


class WithdrawalRequestSerializer(serializers.ModelSerializer):
    """Full serializer for withdrawal requests."""

    amount_display = serializers.SerializerMethodField()
    account_email = serializers.EmailField(source='account.email', read_only=True)

    class Meta:
        model = WithdrawalRequest
        fields = [
            'id',
            'account',
            'account_email',
            'amount',
            'amount_display',
            'payout_destination',
            'status',
            'rejection_reason',
            'requested_at',
            'processed_at',
            'processed_by',
        ]
        read_only_fields = fields

    def get_amount_display(self, obj):
        return f"{to_major_units(obj.amount)} {settings.CURRENCY}"


class WithdrawalCreateSerializer(serializers.Serializer):
    """Input serializer for requesting a withdrawal (amount in minor units)."""

    amount = serializers.IntegerField()
    payout_destination = serializers.CharField(max_length=255, allow_blank=True)


class WithdrawalProcessSerializer(serializers.Serializer):
    """Input serializer for an admin decision."""

    decision = serializers.ChoiceField(choices=['approve', 'reject'])
    reason = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
