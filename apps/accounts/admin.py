# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count

from apps.referrals.money import to_major_units
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for accounts.

    Ledger fields and the referrer are read-only here: balances move only
    through subscription approvals and withdrawal processing.
    """

    list_display = [
        'email',
        'display_name',
        'referral_code',
        'referred_by',
        'wallet_display',
        'earnings_display',
        'referral_count',
        'is_active',
        'created_at',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_superuser',
        'created_at',
    ]

    search_fields = [
        'email',
        'display_name',
        'referral_code',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('Referrals', {
            'fields': ('referral_code', 'referred_by'),
        }),
        ('Wallet', {
            'fields': ('wallet_balance', 'total_earnings', 'earnings', 'downline_earnings'),
            'description': 'Amounts in minor currency units.',
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
    )

    readonly_fields = [
        'referred_by',
        'wallet_balance',
        'total_earnings',
        'earnings',
        'downline_earnings',
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def wallet_display(self, obj):
        return to_major_units(obj.wallet_balance)
    wallet_display.short_description = 'Wallet'
    wallet_display.admin_order_field = 'wallet_balance'

    def earnings_display(self, obj):
        return to_major_units(obj.total_earnings)
    earnings_display.short_description = 'Total earned'
    earnings_display.admin_order_field = 'total_earnings'

    def referral_count(self, obj):
        return obj.referral_total
    referral_count.short_description = 'Referrals'
    referral_count.admin_order_field = 'referral_total'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('referred_by').annotate(referral_total=Count('referrals'))
