"""User registration service."""

import logging
from typing import Optional

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.subscriptions.services import ensure_subscription
from .exceptions import UserRegistrationError, InvalidReferralCodeError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    referral_code: Optional[str] = None
) -> User:
    """
    Register a new account, optionally attached to a referrer.

    The referrer is resolved from the referral code once, here. After
    signup `referred_by` is never changed, which keeps the referral graph
    a forest.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name
        referral_code: Referral code of the inviting account

    Returns:
        Created User instance with a free subscription

    Raises:
        InvalidReferralCodeError: If the referral code matches no account
        UserRegistrationError: If registration fails
    """
    referrer = None
    if referral_code:
        try:
            referrer = User.objects.get(referral_code=referral_code.strip().upper())
        except User.DoesNotExist:
            raise InvalidReferralCodeError(f"Referral code {referral_code} is not valid")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            referred_by=referrer,
        )
    except IntegrityError as e:
        raise UserRegistrationError(f"Registration failed: {str(e)}")

    ensure_subscription(account=user)

    logger.info(
        "Registered account %s (referred_by=%s)",
        user.id,
        referrer.id if referrer else None,
    )
    return user
