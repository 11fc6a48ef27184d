"""Referral code management service."""

import logging
import secrets
import string

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from .exceptions import AccountNotFoundError, ReferralCodeGenerationError

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_SUFFIX_LENGTH = 5


def _build_code(account: User) -> str:
    letters = [c for c in account.get_display_name().upper() if c in string.ascii_uppercase]
    prefix = ''.join(letters[:3]) or 'USR'
    suffix = ''.join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_SUFFIX_LENGTH))
    return f"{prefix}-{suffix}"


def generate_referral_code(*, account: User, max_retries: int = 5) -> str:
    """
    Give an account its referral code, e.g. ``ADA-7QK2P``.

    An account keeps its first code: calling this again returns the
    existing one.

    Args:
        account: Account that will share the code
        max_retries: Maximum attempts to generate a unique code

    Returns:
        The account's referral code

    Raises:
        AccountNotFoundError: If the account no longer exists
        ReferralCodeGenerationError: If no unique code could be generated
    """
    for attempt in range(max_retries):
        code = _build_code(account)

        try:
            with transaction.atomic():
                user = User.objects.select_for_update().get(pk=account.pk)
                if user.referral_code:
                    return user.referral_code

                user.referral_code = code
                user.save(update_fields=['referral_code'])

        except User.DoesNotExist:
            raise AccountNotFoundError(f"Account with ID {account.pk} not found")
        except IntegrityError:
            # Code collision with another account
            continue

        account.referral_code = code
        logger.info("Generated referral code %s for account %s", code, account.pk)
        return code

    raise ReferralCodeGenerationError(
        f"Failed to generate unique referral code after {max_retries} attempts"
    )
