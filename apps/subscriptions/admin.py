from django.contrib import admin, messages
from django.utils.html import format_html

from apps.referrals.commission import plan_price
from apps.referrals.money import to_major_units
from apps.referrals.services import AccountNotFoundError
from .models import Subscription, SubscriptionRequest, SubscriptionStatus
from .services import (
    approve_subscription,
    reject_subscription,
    SubscriptionsServiceError,
)


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ['account', 'plan', 'status_badge', 'started_at', 'cycle_started_at']
    list_filter = ['plan', 'status']
    search_fields = ['account__email', 'account__display_name']
    readonly_fields = ['account', 'started_at', 'cycle_started_at', 'usage', 'updated_at']
    list_select_related = ['account']

    def status_badge(self, obj):
        """Display subscription status as colored badge."""
        color = '#6B8E5E' if obj.status == SubscriptionStatus.ACTIVE else '#D4A373'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color,
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'


@admin.register(SubscriptionRequest)
class SubscriptionRequestAdmin(admin.ModelAdmin):
    """
    Pending upgrade requests.

    Approval pays referral commissions, so requests are only decided
    through the actions below, never edited.
    """

    list_display = ['account', 'requested_plan', 'price_display', 'proof_reference', 'created_at']
    list_filter = ['requested_plan', 'created_at']
    search_fields = ['account__email', 'proof_reference']
    readonly_fields = ['account', 'requested_plan', 'proof_reference', 'created_at']
    list_select_related = ['account']
    actions = ['approve_requests', 'reject_requests']

    def price_display(self, obj):
        return to_major_units(plan_price(obj.requested_plan))
    price_display.short_description = 'Price'

    def has_add_permission(self, request):
        return False

    def _decide(self, request, queryset, decide, verb):
        done = 0
        for sub_request in queryset:
            try:
                decide(request_id=sub_request.pk, admin=request.user)
                done += 1
            except (SubscriptionsServiceError, AccountNotFoundError) as e:
                self.message_user(request, f'{sub_request}: {e}', level=messages.ERROR)
        self.message_user(request, f'{verb} {done} request(s).')

    @admin.action(description='Approve selected requests')
    def approve_requests(self, request, queryset):
        """Approve requests and credit referral commissions."""
        self._decide(request, queryset, approve_subscription, 'Approved')

    @admin.action(description='Reject selected requests')
    def reject_requests(self, request, queryset):
        """Reject requests; accounts go back to the free plan."""
        self._decide(request, queryset, reject_subscription, 'Rejected')
