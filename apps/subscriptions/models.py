from django.db import models
from django.utils import timezone
import uuid


class Plan(models.TextChoices):
    FREE = 'free', 'Free'
    GROWTH = 'growth', 'Growth'
    ENTERPRISE = 'enterprise', 'Enterprise'


PAID_PLANS = (Plan.GROWTH, Plan.ENTERPRISE)


class SubscriptionStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    PENDING_APPROVAL = 'pending_approval', 'Pending approval'


class Subscription(models.Model):
    """
    An account's current plan and its usage counters for the running cycle.

    Every account has exactly one, created at signup as free/active.
    """

    account = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='subscription'
    )

    plan = models.CharField(max_length=20, choices=Plan.choices, default=Plan.FREE)
    status = models.CharField(
        max_length=20,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.ACTIVE
    )

    started_at = models.DateTimeField(null=True, blank=True)
    cycle_started_at = models.DateTimeField(default=timezone.now)

    # feature name -> number of uses in the current cycle
    usage = models.JSONField(default=dict, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'subscriptions'
        indexes = [
            models.Index(fields=['plan', 'status'], name='subscriptio_plan_2c91d4_idx'),
        ]

    def __str__(self):
        return f"{self.account_id}: {self.plan} ({self.status})"


class SubscriptionRequest(models.Model):
    """
    A pending upgrade awaiting an admin decision.

    The row only ever exists while pending; approving or rejecting deletes it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    account = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='subscription_requests'
    )
    requested_plan = models.CharField(max_length=20, choices=Plan.choices)
    proof_reference = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'subscription_requests'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['account'],
                name='unique_pending_subscription_request',
            ),
        ]

    def __str__(self):
        return f"{self.account_id} -> {self.requested_plan}"
