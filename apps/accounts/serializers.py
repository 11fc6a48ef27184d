from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from apps.referrals.money import to_major_units
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Profile serializer, including the read-only referral wallet."""

    wallet_balance_display = serializers.SerializerMethodField()
    total_earnings_display = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'referral_code',
            'referred_by',
            'wallet_balance',
            'wallet_balance_display',
            'total_earnings',
            'total_earnings_display',
            'earnings',
            'downline_earnings',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields

    def get_wallet_balance_display(self, obj):
        return str(to_major_units(obj.wallet_balance))

    def get_total_earnings_display(self, obj):
        return str(to_major_units(obj.total_earnings))


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Serializer for user registration."""

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    referral_code = serializers.CharField(
        max_length=16,
        required=False,
        allow_blank=True,
        help_text="Referral code of the account that invited this user."
    )

    class Meta:
        model = User
        fields = ['email', 'password', 'password_confirm', 'display_name', 'referral_code']

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs

