"""
Referral graph traversal.

Accounts point at their referrer through ``User.referred_by``. Commission
only ever reaches two levels up, so traversal is hard-bounded at
``MAX_UPLINE_DEPTH`` hops whatever shape the stored graph has. A revisited
account (a malformed cycle) also ends the walk.
"""

import logging
from typing import List, Optional

from apps.accounts.models import User

logger = logging.getLogger(__name__)

MAX_UPLINE_DEPTH = 2


def walk_upline(account: User, *, max_depth: int = MAX_UPLINE_DEPTH) -> List[User]:
    """
    Return the account's ancestors, nearest first, at most ``max_depth`` of them.

    Args:
        account: Account to start from (not included in the result)
        max_depth: Maximum number of hops to follow

    Returns:
        List of ancestor accounts: ``[direct_referrer, upline, ...]``
    """
    ancestors = []
    visited = {account.pk}
    parent_id = account.referred_by_id

    while parent_id is not None and len(ancestors) < max_depth:
        if parent_id in visited:
            logger.error(
                "Referral cycle detected at account %s while walking upline of %s",
                parent_id,
                account.pk,
            )
            break

        parent = User.objects.filter(pk=parent_id).first()
        if parent is None:
            break

        ancestors.append(parent)
        visited.add(parent.pk)
        parent_id = parent.referred_by_id

    return ancestors


def resolve_direct_referrer(account: User) -> Optional[User]:
    """Return the account that referred ``account``, or None."""
    ancestors = walk_upline(account, max_depth=1)
    return ancestors[0] if ancestors else None


def resolve_upline(account: User) -> Optional[User]:
    """Return the direct referrer's own referrer, or None if either hop is missing."""
    ancestors = walk_upline(account, max_depth=2)
    return ancestors[1] if len(ancestors) == 2 else None
