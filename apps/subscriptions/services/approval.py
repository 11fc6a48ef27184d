"""
Subscription approval workflow.

Upgrades are paid for outside the system and confirmed by an admin.
Approving a request pays the two-tier referral commission, activates the
plan and removes the request, all in one database transaction: if any
step fails nothing is credited and the request stays pending.
"""

import logging
from dataclasses import dataclass, field as dataclass_field
from typing import List
from uuid import UUID

from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User
from apps.referrals.commission import DIRECT_RATE, UPLINE_RATE, commission, plan_price
from apps.referrals.models import CommissionCredit, LedgerField
from apps.referrals.services import AccountNotFoundError, credit, walk_upline
from ..models import PAID_PLANS, Plan, Subscription, SubscriptionRequest, SubscriptionStatus
from .exceptions import (
    SubscriptionRequestNotFoundError,
    InsufficientPermissionsError,
    UnknownPlanError,
    DuplicateSubscriptionRequestError,
)
from .usage_quota import empty_usage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreditedCommission:
    account_id: UUID
    field: str
    amount: int


@dataclass(frozen=True)
class ApprovalResult:
    account_id: UUID
    plan: str
    commissions_credited: List[CreditedCommission] = dataclass_field(default_factory=list)


def _require_staff(admin) -> None:
    if admin is None or not getattr(admin, 'is_staff', False):
        raise InsufficientPermissionsError("Only staff can decide subscription requests")


def _lock_request(request_id: UUID) -> SubscriptionRequest:
    try:
        return SubscriptionRequest.objects.select_for_update().get(pk=request_id)
    except SubscriptionRequest.DoesNotExist:
        raise SubscriptionRequestNotFoundError(
            f"Subscription request with ID {request_id} not found"
        )


def _lock_subscription(account_id: UUID) -> Subscription:
    account = User.objects.filter(pk=account_id).first()
    if account is None:
        raise AccountNotFoundError(f"Account with ID {account_id} not found")
    subscription, _ = Subscription.objects.select_for_update().get_or_create(account=account)
    return subscription


def ensure_subscription(*, account: User) -> Subscription:
    """Return the account's subscription, creating the free one if missing."""
    subscription, created = Subscription.objects.get_or_create(account=account)
    if created:
        logger.info("Created free subscription for account %s", account.pk)
    return subscription


@transaction.atomic
def submit_subscription_request(
    *,
    account: User,
    plan: str,
    proof_reference: str = ""
) -> SubscriptionRequest:
    """
    Ask for an upgrade to a paid plan.

    Args:
        account: Account requesting the upgrade
        plan: ``growth`` or ``enterprise``
        proof_reference: Payment reference for the admin to check

    Returns:
        The pending SubscriptionRequest

    Raises:
        UnknownPlanError: If plan is not a paid plan
        DuplicateSubscriptionRequestError: If a request is already pending
    """
    if plan not in PAID_PLANS:
        raise UnknownPlanError(f"Plan {plan!r} cannot be requested")

    ensure_subscription(account=account)
    subscription = Subscription.objects.select_for_update().get(account=account)

    if SubscriptionRequest.objects.filter(account=account).exists():
        raise DuplicateSubscriptionRequestError("A subscription request is already pending")

    try:
        with transaction.atomic():
            sub_request = SubscriptionRequest.objects.create(
                account=account,
                requested_plan=plan,
                proof_reference=proof_reference.strip(),
            )
    except IntegrityError:
        raise DuplicateSubscriptionRequestError("A subscription request is already pending")

    subscription.status = SubscriptionStatus.PENDING_APPROVAL
    subscription.save(update_fields=['status', 'updated_at'])

    logger.info("Account %s requested upgrade to %s", account.pk, plan)
    return sub_request


def approve_subscription(*, request_id: UUID, admin: User) -> ApprovalResult:
    """
    Approve a pending upgrade and pay referral commissions.

    The subscriber's direct referrer gets DIRECT_RATE of the plan price
    as ``earnings``; the referrer's own referrer gets UPLINE_RATE as
    ``downline_earnings``. A missing referrer or a plan without a price
    simply credits nothing.

    Args:
        request_id: SubscriptionRequest to approve
        admin: Account performing the approval

    Returns:
        ApprovalResult listing every credit made

    Raises:
        InsufficientPermissionsError: If admin is not staff
        SubscriptionRequestNotFoundError: If the request doesn't exist
            (including when it was already decided)
        AccountNotFoundError: If the subscriber no longer exists
    """
    _require_staff(admin)

    with transaction.atomic():
        sub_request = _lock_request(request_id)
        subscription = _lock_subscription(sub_request.account_id)
        account = subscription.account
        plan = sub_request.requested_plan

        price = plan_price(plan)
        credited = []

        if price > 0:
            tiers = zip(
                walk_upline(account),
                ((LedgerField.EARNINGS, DIRECT_RATE), (LedgerField.DOWNLINE_EARNINGS, UPLINE_RATE)),
            )
            for beneficiary, (ledger_field, rate) in tiers:
                amount = commission(price, rate)
                if amount <= 0:
                    continue
                credit(account_id=beneficiary.pk, field=ledger_field.value, amount=amount)
                credited.append(CreditedCommission(
                    account_id=beneficiary.pk,
                    field=ledger_field.value,
                    amount=amount,
                ))

        now = timezone.now()
        subscription.plan = plan
        subscription.status = SubscriptionStatus.ACTIVE
        subscription.started_at = now
        subscription.cycle_started_at = now
        subscription.usage = empty_usage()
        subscription.save()

        CommissionCredit.objects.bulk_create([
            CommissionCredit(
                beneficiary_id=entry.account_id,
                source_account_id=account.pk,
                plan=plan,
                field=entry.field,
                amount=entry.amount,
            )
            for entry in credited
        ])

        sub_request.delete()

    logger.info(
        "Subscription request %s approved by %s: account %s now on %s, %d commission(s) credited",
        request_id, admin.pk, account.pk, plan, len(credited)
    )

    return ApprovalResult(
        account_id=account.pk,
        plan=plan,
        commissions_credited=credited,
    )


def reject_subscription(*, request_id: UUID, admin: User) -> Subscription:
    """
    Reject a pending upgrade.

    The account is put back on the free plan and the request is removed.
    Ledger fields and usage counters are not touched.

    Raises:
        InsufficientPermissionsError: If admin is not staff
        SubscriptionRequestNotFoundError: If the request doesn't exist
        AccountNotFoundError: If the subscriber no longer exists
    """
    _require_staff(admin)

    with transaction.atomic():
        sub_request = _lock_request(request_id)
        subscription = _lock_subscription(sub_request.account_id)

        subscription.plan = Plan.FREE
        subscription.status = SubscriptionStatus.ACTIVE
        subscription.save(update_fields=['plan', 'status', 'updated_at'])

        sub_request.delete()

    logger.info(
        "Subscription request %s rejected by %s for account %s",
        request_id, admin.pk, subscription.account_id
    )
    return subscription
