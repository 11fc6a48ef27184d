"""
Subscriptions service layer.

Approval of plan upgrades (with referral commission payout) and the
per-plan usage quotas.
"""

from .exceptions import (
    SubscriptionsServiceError,
    SubscriptionRequestNotFoundError,
    InsufficientPermissionsError,
    UnknownPlanError,
    DuplicateSubscriptionRequestError,
    UnknownFeatureError,
)

from .approval import (
    ApprovalResult,
    CreditedCommission,
    ensure_subscription,
    submit_subscription_request,
    approve_subscription,
    reject_subscription,
)

from .usage_quota import (
    FEATURES,
    QUOTA_LIMITS,
    QuotaStatus,
    quota_limit,
    refresh_usage_cycle,
    get_quota_status,
    consume_quota,
)

__all__ = [
    # Exceptions
    'SubscriptionsServiceError',
    'SubscriptionRequestNotFoundError',
    'InsufficientPermissionsError',
    'UnknownPlanError',
    'DuplicateSubscriptionRequestError',
    'UnknownFeatureError',
    # Approval
    'ApprovalResult',
    'CreditedCommission',
    'ensure_subscription',
    'submit_subscription_request',
    'approve_subscription',
    'reject_subscription',
    # Usage quota
    'FEATURES',
    'QUOTA_LIMITS',
    'QuotaStatus',
    'quota_limit',
    'refresh_usage_cycle',
    'get_quota_status',
    'consume_quota',
]
