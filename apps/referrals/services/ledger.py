"""
Account ledger.

The only code allowed to move money on an account. Both operations are a
single SQL UPDATE evaluated by the database:

- ``credit`` adds to an earnings field, ``total_earnings`` and
  ``wallet_balance`` with ``F()`` expressions, so concurrent credits that
  land on the same upline are never lost.
- ``debit`` subtracts from ``wallet_balance`` only where the balance still
  covers the amount, so two concurrent debits cannot both pass a stale
  balance check.

Callers that need several ledger changes to commit together wrap them in
``transaction.atomic()``.
"""

import logging
from uuid import UUID

from django.db.models import F

from apps.accounts.models import User
from apps.referrals.models import LedgerField
from .exceptions import (
    AccountNotFoundError,
    InvalidAmountError,
    InvalidLedgerFieldError,
    InsufficientBalanceError,
)

logger = logging.getLogger(__name__)

CREDITABLE_FIELDS = frozenset(LedgerField.values)


def _validate_amount(amount) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(f"Amount must be a positive integer of minor units, got {amount!r}")


def credit(*, account_id: UUID, field: str, amount: int) -> None:
    """
    Credit a commission to an account.

    Args:
        account_id: Account receiving the credit
        field: ``earnings`` or ``downline_earnings``
        amount: Positive amount in minor units

    Raises:
        InvalidAmountError: If amount is not a positive integer
        InvalidLedgerFieldError: If field is not an earnings field
        AccountNotFoundError: If the account doesn't exist
    """
    _validate_amount(amount)
    if field not in CREDITABLE_FIELDS:
        raise InvalidLedgerFieldError(f"Cannot credit ledger field {field!r}")

    updated = User.objects.filter(pk=account_id).update(**{
        field: F(field) + amount,
        'total_earnings': F('total_earnings') + amount,
        'wallet_balance': F('wallet_balance') + amount,
    })
    if not updated:
        raise AccountNotFoundError(f"Account with ID {account_id} not found")

    logger.info("Credited %s to %s of account %s", amount, field, account_id)


def debit(*, account_id: UUID, amount: int) -> None:
    """
    Debit an account's wallet balance.

    Args:
        account_id: Account to debit
        amount: Positive amount in minor units

    Raises:
        InvalidAmountError: If amount is not a positive integer
        AccountNotFoundError: If the account doesn't exist
        InsufficientBalanceError: If the balance doesn't cover the amount
    """
    _validate_amount(amount)

    updated = (
        User.objects
        .filter(pk=account_id, wallet_balance__gte=amount)
        .update(wallet_balance=F('wallet_balance') - amount)
    )
    if not updated:
        if not User.objects.filter(pk=account_id).exists():
            raise AccountNotFoundError(f"Account with ID {account_id} not found")
        raise InsufficientBalanceError(
            f"Wallet balance of account {account_id} does not cover {amount}"
        )

    logger.info("Debited %s from wallet of account %s", amount, account_id)
