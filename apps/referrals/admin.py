from django.contrib import admin

from .models import CommissionCredit


@admin.register(CommissionCredit)
class CommissionCreditAdmin(admin.ModelAdmin):
    """Read-only audit trail of credited commissions."""

    list_display = ['beneficiary', 'source_account', 'plan', 'field', 'amount', 'created_at']
    list_filter = ['field', 'plan', 'created_at']
    search_fields = ['beneficiary__email', 'source_account__email']
    date_hierarchy = 'created_at'
    list_select_related = ['beneficiary', 'source_account']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
