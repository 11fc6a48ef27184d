"""Referral dashboard read model."""

from typing import Any, Dict

from apps.accounts.models import User
from apps.withdrawals.models import WithdrawalRequest
from .exceptions import AccountNotFoundError


def get_dashboard(*, account: User) -> Dict[str, Any]:
    """
    Aggregate an account's referral and withdrawal history.

    Args:
        account: The authenticated account

    Returns:
        dict: A dictionary containing:
            - referrals (QuerySet[User]): Accounts this account referred, newest first.
            - withdrawals (QuerySet[WithdrawalRequest]): Own withdrawal requests, newest first.
            - referral_count (int): Number of direct referrals.
            - referral_code (str | None): The account's shareable code.
            - wallet_balance, total_earnings, earnings, downline_earnings (int):
              Current ledger values in minor units.

    Raises:
        AccountNotFoundError: If the account no longer exists
    """
    try:
        fresh = User.objects.get(pk=account.pk)
    except User.DoesNotExist:
        raise AccountNotFoundError(f"Account with ID {account.pk} not found")

    referrals = User.objects.filter(referred_by=fresh).order_by('-created_at')
    withdrawals = WithdrawalRequest.objects.filter(account=fresh).order_by('-requested_at')

    return {
        'referrals': referrals,
        'withdrawals': withdrawals,
        'referral_count': referrals.count(),
        'referral_code': fresh.referral_code,
        'wallet_balance': fresh.wallet_balance,
        'total_earnings': fresh.total_earnings,
        'earnings': fresh.earnings,
        'downline_earnings': fresh.downline_earnings,
    }
