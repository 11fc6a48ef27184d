"""Withdrawal notifications, dispatched once the decision has committed."""

import logging

from django.conf import settings
from django.core.mail import send_mail

from apps.referrals.money import to_major_units

logger = logging.getLogger(__name__)


def notify_withdrawal_processed(withdrawal) -> None:
    """Email the account owner what happened to their withdrawal."""
    account = withdrawal.account
    amount = f"{settings.CURRENCY} {to_major_units(withdrawal.amount)}"

    subject = f"Your withdrawal of {amount} was {withdrawal.status}"
    lines = [
        f"Hello {account.get_display_name()},",
        "",
        f"Your withdrawal request of {amount} to {withdrawal.payout_destination} "
        f"was {withdrawal.status}.",
    ]
    if withdrawal.rejection_reason:
        lines.append(f"Reason: {withdrawal.rejection_reason}")

    send_mail(subject, "\n".join(lines), None, [account.email])

    logger.info(
        "Notified account %s: withdrawal %s %s",
        account.pk,
        withdrawal.pk,
        withdrawal.status,
    )
