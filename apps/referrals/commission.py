"""
Commission Engine
=================

Pure commission arithmetic for the two-tier referral programme.

A subscription upgrade pays the subscriber's direct referrer
``DIRECT_RATE`` of the plan price and that referrer's own referrer (the
upline) ``UPLINE_RATE`` of the plan price.

All amounts are integer minor units. The multiplication is done in
``Decimal`` and truncated to a whole minor unit, so a commission is never
larger than its exact value::

    >>> commission(1_500_000, DIRECT_RATE)
    300000
    >>> commission(1_500_000, UPLINE_RATE)
    75000
"""

import logging
from decimal import Decimal, ROUND_DOWN

from django.conf import settings

logger = logging.getLogger(__name__)

DIRECT_RATE = Decimal('0.20')
UPLINE_RATE = Decimal('0.05')


def plan_price(plan: str) -> int:
    """
    Look up a plan's price in minor units.

    A plan missing from ``settings.SUBSCRIPTION_PLAN_PRICES`` prices at
    zero, which means no commission is paid for it. That is almost always
    a configuration mistake, so it is logged loudly rather than raised.
    """
    price = settings.SUBSCRIPTION_PLAN_PRICES.get(plan)
    if price is None:
        logger.warning("No price configured for plan %r; commission defaults to 0", plan)
        return 0
    return int(price)


def commission(price: int, rate: Decimal) -> int:
    """Return ``price * rate`` truncated to a whole minor unit."""
    if price < 0:
        raise ValueError("Plan price cannot be negative")
    amount = (Decimal(price) * rate).quantize(Decimal('1'), rounding=ROUND_DOWN)
    return int(amount)
