"""
Withdrawal workflow.

An account asks to withdraw part of its wallet; an admin later approves
or rejects the request. The balance check at request time is advisory
only: nothing is reserved, so several pending requests may together
exceed the wallet. The authoritative check is the conditional debit made
at approval, which auto-rejects the request if the balance no longer
covers it.
"""

import logging
from uuid import UUID

from django.conf import settings
from django.db import models, transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.referrals.services import debit
from ..models import WithdrawalRequest, WithdrawalStatus
from .exceptions import (
    BelowMinimumError,
    InvalidDestinationError,
    InvalidDecisionError,
    WithdrawalNotFoundError,
    AlreadyProcessedError,
    InsufficientPermissionsError,
    InsufficientBalanceError,
)
from .notifications import notify_withdrawal_processed

logger = logging.getLogger(__name__)

INSUFFICIENT_BALANCE_REASON = 'insufficient_balance'


class WithdrawalDecision(models.TextChoices):
    APPROVE = 'approve', 'Approve'
    REJECT = 'reject', 'Reject'


def request_withdrawal(*, account: User, amount: int, destination: str) -> WithdrawalRequest:
    """
    Create a pending withdrawal request.

    Args:
        account: Account withdrawing
        amount: Amount in minor units
        destination: Where the payout should go (bank account, wallet id)

    Returns:
        The pending WithdrawalRequest

    Raises:
        BelowMinimumError: If amount is below settings.MINIMUM_WITHDRAWAL
        InvalidDestinationError: If destination is empty
    """
    minimum = settings.MINIMUM_WITHDRAWAL
    if amount < minimum:
        raise BelowMinimumError(f"Minimum withdrawal is {minimum}, got {amount}")

    destination = (destination or '').strip()
    if not destination:
        raise InvalidDestinationError("Payout destination is required")

    balance = (
        User.objects
        .filter(pk=account.pk)
        .values_list('wallet_balance', flat=True)
        .first()
    )
    if balance is None or amount > balance:
        logger.warning(
            "Withdrawal of %s requested by account %s exceeds its wallet balance %s",
            amount, account.pk, balance
        )

    withdrawal = WithdrawalRequest.objects.create(
        account=account,
        amount=amount,
        payout_destination=destination,
    )

    logger.info("Withdrawal %s of %s requested by account %s", withdrawal.pk, amount, account.pk)
    return withdrawal


def process_withdrawal(
    *,
    withdrawal_id: UUID,
    decision: str,
    admin: User,
    reason: str = ""
) -> WithdrawalRequest:
    """
    Approve or reject a pending withdrawal.

    Approving debits the wallet. If the balance no longer covers the
    amount the request is rejected with reason ``insufficient_balance``,
    that rejection is committed, and InsufficientBalanceError is raised.

    Args:
        withdrawal_id: WithdrawalRequest to process
        decision: ``approve`` or ``reject``
        admin: Staff account processing the request
        reason: Optional rejection reason

    Returns:
        The processed WithdrawalRequest

    Raises:
        InsufficientPermissionsError: If admin is not staff
        InvalidDecisionError: If decision is not approve/reject
        WithdrawalNotFoundError: If the withdrawal doesn't exist
        AlreadyProcessedError: If the withdrawal is not pending
        InsufficientBalanceError: If an approval was auto-rejected
    """
    if admin is None or not getattr(admin, 'is_staff', False):
        raise InsufficientPermissionsError("Only staff can process withdrawals")
    if decision not in WithdrawalDecision.values:
        raise InvalidDecisionError(f"Unknown decision: {decision!r}")

    auto_rejected = None

    with transaction.atomic():
        try:
            withdrawal = WithdrawalRequest.objects.select_for_update().get(pk=withdrawal_id)
        except WithdrawalRequest.DoesNotExist:
            raise WithdrawalNotFoundError(f"Withdrawal with ID {withdrawal_id} not found")

        if withdrawal.status != WithdrawalStatus.PENDING:
            raise AlreadyProcessedError(
                f"Withdrawal {withdrawal_id} is already {withdrawal.status}"
            )

        if decision == WithdrawalDecision.APPROVE:
            try:
                debit(account_id=withdrawal.account_id, amount=withdrawal.amount)
            except InsufficientBalanceError as e:
                auto_rejected = e
                withdrawal.status = WithdrawalStatus.REJECTED
                withdrawal.rejection_reason = INSUFFICIENT_BALANCE_REASON
            else:
                withdrawal.status = WithdrawalStatus.APPROVED
        else:
            withdrawal.status = WithdrawalStatus.REJECTED
            withdrawal.rejection_reason = reason.strip()

        withdrawal.processed_at = timezone.now()
        withdrawal.processed_by = admin
        withdrawal.save(update_fields=['status', 'rejection_reason', 'processed_at', 'processed_by'])

        transaction.on_commit(lambda: notify_withdrawal_processed(withdrawal), robust=True)

    if auto_rejected is not None:
        logger.warning(
            "Withdrawal %s auto-rejected: balance of account %s does not cover %s",
            withdrawal.pk, withdrawal.account_id, withdrawal.amount
        )
        raise auto_rejected

    logger.info("Withdrawal %s %s by %s", withdrawal.pk, withdrawal.status, admin.pk)
    return withdrawal
