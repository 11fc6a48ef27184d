from rest_framework import serializers

from apps.accounts.models import User
from apps.withdrawals.serializers import WithdrawalRequestListSerializer
from .money import to_major_units
from .models import CommissionCredit


class ReferralEntrySerializer(serializers.ModelSerializer):
    """A referred account as shown on the referrer's dashboard."""

    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'name', 'created_at']
        read_only_fields = fields

    def get_name(self, obj):
        return obj.get_display_name()


class DashboardSerializer(serializers.Serializer):
    """Serializer for the referral dashboard."""

    referrals = ReferralEntrySerializer(many=True)
    withdrawals = WithdrawalRequestListSerializer(many=True)
    referral_count = serializers.IntegerField()
    referral_code = serializers.CharField(allow_null=True)
    wallet_balance = serializers.IntegerField()
    wallet_balance_display = serializers.SerializerMethodField()
    total_earnings = serializers.IntegerField()
    earnings = serializers.IntegerField()
    downline_earnings = serializers.IntegerField()

    def get_wallet_balance_display(self, obj):
        return str(to_major_units(obj['wallet_balance']))


class CommissionCreditSerializer(serializers.ModelSerializer):
    """Serializer for commission audit entries."""

    class Meta:
        model = CommissionCredit
        fields = ['id', 'beneficiary', 'source_account', 'plan', 'field', 'amount', 'created_at']
        read_only_fields = fields
