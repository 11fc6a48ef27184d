from rest_framework import serializers

from apps.referrals.commission import plan_price
from apps.referrals.money import to_major_units
from .models import Subscription, SubscriptionRequest


class SubscriptionSerializer(serializers.ModelSerializer):
    """Serializer for the current user's subscription."""

    class Meta:
        model = Subscription
        fields = ['plan', 'status', 'started_at', 'cycle_started_at', 'usage']
        read_only_fields = fields


class SubscriptionRequestSerializer(serializers.ModelSerializer):
    """Serializer for pending upgrade requests."""

    account_email = serializers.EmailField(source='account.email', read_only=True)
    price = serializers.SerializerMethodField()
    price_display = serializers.SerializerMethodField()

    class Meta:
        model = SubscriptionRequest
        fields = [
            'id',
            'account',
            'account_email',
            'requested_plan',
            'price',
            'price_display',
            'proof_reference',
            'created_at',
        ]
        read_only_fields = fields

    def get_price(self, obj):
        return plan_price(obj.requested_plan)

    def get_price_display(self, obj):
        return str(to_major_units(plan_price(obj.requested_plan)))


class SubscriptionRequestCreateSerializer(serializers.Serializer):
    """Input serializer for requesting an upgrade."""

    plan = serializers.CharField(max_length=20)
    proof_reference = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')


class CreditedCommissionSerializer(serializers.Serializer):
    account_id = serializers.UUIDField()
    field = serializers.CharField()
    amount = serializers.IntegerField()


class ApprovalResultSerializer(serializers.Serializer):
    """Output of an approval."""

    account_id = serializers.UUIDField()
    plan = serializers.CharField()
    commissions_credited = CreditedCommissionSerializer(many=True)


class QuotaStatusSerializer(serializers.Serializer):
    feature = serializers.CharField()
    used = serializers.IntegerField()
    limit = serializers.IntegerField()
    remaining = serializers.IntegerField()
    limit_reached = serializers.BooleanField()
    consumed = serializers.BooleanField()
