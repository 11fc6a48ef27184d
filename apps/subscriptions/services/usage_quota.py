"""
Usage quota service.

Each plan allows a fixed number of uses per feature in a usage cycle of
``settings.USAGE_CYCLE_DAYS`` days. There is no scheduler: the cycle is
rolled over lazily the first time a subscription is looked at after it
has expired.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from ..models import Plan, Subscription
from .exceptions import UnknownFeatureError

logger = logging.getLogger(__name__)

FEATURES = ('blog_posts', 'content_plans', 'content_strategies', 'images')

QUOTA_LIMITS = {
    Plan.FREE: {'blog_posts': 3, 'content_plans': 5, 'content_strategies': 2, 'images': 5},
    Plan.GROWTH: {'blog_posts': 10, 'content_plans': 20, 'content_strategies': 10, 'images': 30},
    Plan.ENTERPRISE: {'blog_posts': 30, 'content_plans': 50, 'content_strategies': 30, 'images': 70},
}


@dataclass(frozen=True)
class QuotaStatus:
    feature: str
    used: int
    limit: int
    limit_reached: bool
    consumed: bool = False

    @property
    def remaining(self) -> int:
        return max(self.limit - self.used, 0)


def empty_usage() -> dict:
    return {feature: 0 for feature in FEATURES}


def quota_limit(plan: str, feature: str) -> int:
    """Return how many uses of ``feature`` a cycle of ``plan`` allows."""
    if feature not in FEATURES:
        raise UnknownFeatureError(f"Unknown feature: {feature}")
    limits = QUOTA_LIMITS.get(plan)
    if limits is None:
        logger.warning("No quota limits for plan %r; using free limits", plan)
        limits = QUOTA_LIMITS[Plan.FREE]
    return limits[feature]


def refresh_usage_cycle(subscription: Subscription, now: Optional[datetime] = None) -> bool:
    """
    Roll the usage cycle over if it has expired.

    Args:
        subscription: Subscription to check (saved if it is reset)
        now: Current time, defaults to ``timezone.now()``

    Returns:
        True if the counters were reset
    """
    now = now or timezone.now()
    cycle_length = timedelta(days=settings.USAGE_CYCLE_DAYS)

    if now - subscription.cycle_started_at <= cycle_length:
        return False

    subscription.usage = empty_usage()
    subscription.cycle_started_at = now
    subscription.save(update_fields=['usage', 'cycle_started_at', 'updated_at'])

    logger.info("Usage cycle reset for account %s", subscription.account_id)
    return True


def _locked_subscription(account: User) -> Subscription:
    subscription, _ = Subscription.objects.select_for_update().get_or_create(account=account)
    return subscription


def _status(subscription: Subscription, feature: str, consumed: bool = False) -> QuotaStatus:
    used = int(subscription.usage.get(feature, 0))
    limit = quota_limit(subscription.plan, feature)
    return QuotaStatus(
        feature=feature,
        used=used,
        limit=limit,
        limit_reached=used >= limit,
        consumed=consumed,
    )


@transaction.atomic
def get_quota_status(*, account: User, feature: str) -> QuotaStatus:
    """
    Get an account's usage of a feature in the current cycle.

    Raises:
        UnknownFeatureError: If the feature has no quota
    """
    if feature not in FEATURES:
        raise UnknownFeatureError(f"Unknown feature: {feature}")

    subscription = _locked_subscription(account)
    refresh_usage_cycle(subscription)
    return _status(subscription, feature)


@transaction.atomic
def consume_quota(*, account: User, feature: str) -> QuotaStatus:
    """
    Record one use of a feature if the plan still allows it.

    Hitting the limit is a normal outcome, not an error: the returned
    status has ``consumed=False`` and ``limit_reached=True`` and the
    counter is left alone.

    Args:
        account: Account using the feature
        feature: One of FEATURES

    Returns:
        QuotaStatus after the attempt

    Raises:
        UnknownFeatureError: If the feature has no quota
    """
    if feature not in FEATURES:
        raise UnknownFeatureError(f"Unknown feature: {feature}")

    subscription = _locked_subscription(account)
    refresh_usage_cycle(subscription)

    current = _status(subscription, feature)
    if current.limit_reached:
        logger.info(
            "Quota limit reached for %s by account %s (%s/%s)",
            feature, account.pk, current.used, current.limit
        )
        return current

    usage = dict(subscription.usage)
    usage[feature] = current.used + 1
    subscription.usage = usage
    subscription.save(update_fields=['usage', 'updated_at'])

    return _status(subscription, feature, consumed=True)
