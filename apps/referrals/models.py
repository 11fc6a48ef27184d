from django.db import models
from django.core.validators import MinValueValidator
import uuid


class LedgerField(models.TextChoices):
    EARNINGS = 'earnings', 'Direct referral earnings'
    DOWNLINE_EARNINGS = 'downline_earnings', 'Downline earnings'


class CommissionCredit(models.Model):
    """One commission credited to a referrer when a subscription was approved."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    beneficiary = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='commission_credits'
    )
    source_account = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='commissions_generated'
    )

    plan = models.CharField(max_length=20)
    field = models.CharField(max_length=20, choices=LedgerField.choices)
    amount = models.BigIntegerField(validators=[MinValueValidator(1)])

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'commission_credits'
        indexes = [
            models.Index(fields=['beneficiary', 'created_at'], name='commission__benefic_8f1a2c_idx'),
            models.Index(fields=['source_account'], name='commission__source__5b7d3e_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.amount} to {self.beneficiary_id} ({self.field}, {self.plan})"
