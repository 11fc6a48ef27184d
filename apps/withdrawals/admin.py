from django.contrib import admin, messages
from django.utils.html import format_html

from apps.referrals.money import to_major_units
from .models import WithdrawalRequest, WithdrawalStatus
from .services import (
    process_withdrawal,
    WithdrawalDecision,
    WithdrawalsServiceError,
    InsufficientBalanceError,
)

STATUS_COLORS = {
    WithdrawalStatus.PENDING: '#D4A373',
    WithdrawalStatus.APPROVED: '#6B8E5E',
    WithdrawalStatus.REJECTED: '#B85C5C',
}


@admin.register(WithdrawalRequest)
class WithdrawalRequestAdmin(admin.ModelAdmin):
    list_display = [
        'account',
        'amount_display',
        'payout_destination',
        'status_badge',
        'rejection_reason',
        'requested_at',
        'processed_by',
    ]
    list_filter = ['status', 'requested_at']
    search_fields = ['account__email', 'payout_destination']
    date_hierarchy = 'requested_at'
    readonly_fields = [
        'account',
        'amount',
        'payout_destination',
        'status',
        'rejection_reason',
        'requested_at',
        'processed_at',
        'processed_by',
    ]
    list_select_related = ['account', 'processed_by']
    actions = ['approve_withdrawals', 'reject_withdrawals']

    def amount_display(self, obj):
        return to_major_units(obj.amount)
    amount_display.short_description = 'Amount'
    amount_display.admin_order_field = 'amount'

    def status_badge(self, obj):
        """Display withdrawal status as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#ccc'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def has_add_permission(self, request):
        return False

    def _process(self, request, queryset, decision):
        done = 0
        for withdrawal in queryset.filter(status=WithdrawalStatus.PENDING):
            try:
                process_withdrawal(withdrawal_id=withdrawal.pk, decision=decision, admin=request.user)
                done += 1
            except InsufficientBalanceError:
                self.message_user(
                    request,
                    f'{withdrawal}: rejected, wallet balance is insufficient.',
                    level=messages.WARNING,
                )
            except WithdrawalsServiceError as e:
                self.message_user(request, f'{withdrawal}: {e}', level=messages.ERROR)
        self.message_user(request, f'Processed {done} withdrawal(s).')

    @admin.action(description='Approve selected withdrawals')
    def approve_withdrawals(self, request, queryset):
        """Approve pending withdrawals and debit the wallets."""
        self._process(request, queryset, WithdrawalDecision.APPROVE)

    @admin.action(description='Reject selected withdrawals')
    def reject_withdrawals(self, request, queryset):
        """Reject pending withdrawals."""
        self._process(request, queryset, WithdrawalDecision.REJECT)
