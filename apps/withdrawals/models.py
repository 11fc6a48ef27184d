from django.db import models
from django.core.validators import MinValueValidator
import uuid


class WithdrawalStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class WithdrawalRequest(models.Model):
    """
    A request to pay out part of an account's wallet.

    Funds are not reserved while the request is pending; the wallet is
    only debited when an admin approves it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    account = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='withdrawal_requests'
    )

    # Minor currency units
    amount = models.BigIntegerField(validators=[MinValueValidator(1)])
    payout_destination = models.CharField(max_length=255)

    status = models.CharField(
        max_length=20,
        choices=WithdrawalStatus.choices,
        default=WithdrawalStatus.PENDING
    )
    rejection_reason = models.CharField(max_length=100, blank=True)

    requested_at = models.DateTimeField(auto_now_add=True)
    processed_at = models.DateTimeField(null=True, blank=True)
    processed_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='processed_withdrawals'
    )

    class Meta:
        db_table = 'withdrawal_requests'
        ordering = ['-requested_at']
        indexes = [
            models.Index(fields=['account', 'requested_at'], name='withdrawal__account_7e2b90_idx'),
            models.Index(fields=['status'], name='withdrawal__status_41c8af_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name='withdrawal_amount_positive',
            ),
        ]

    def __str__(self):
        return f"{self.account_id}: {self.amount} ({self.status})"
