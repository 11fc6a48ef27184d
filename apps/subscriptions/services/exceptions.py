"""
Domain-specific exceptions for subscriptions app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class SubscriptionsServiceError(Exception):
    """Base exception for all subscriptions service errors."""
    pass


class SubscriptionRequestNotFoundError(SubscriptionsServiceError):
    """Raised when a subscription request does not exist (or was already decided)."""
    pass


class InsufficientPermissionsError(SubscriptionsServiceError):
    """Raised when a non-staff account tries to decide a request."""
    pass


class UnknownPlanError(SubscriptionsServiceError):
    """Raised when an upgrade is requested to a plan that cannot be purchased."""
    pass


class DuplicateSubscriptionRequestError(SubscriptionsServiceError):
    """Raised when an account already has a pending upgrade request."""
    pass


class UnknownFeatureError(SubscriptionsServiceError):
    """Raised when a quota is queried for a feature that has no limits."""
    pass
