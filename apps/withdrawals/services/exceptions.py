"""
Domain-specific exceptions for withdrawals app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""

from apps.referrals.services.exceptions import InsufficientBalanceError


class WithdrawalsServiceError(Exception):
    """Base exception for all withdrawals service errors."""
    pass


class BelowMinimumError(WithdrawalsServiceError):
    """Raised when a withdrawal is smaller than MINIMUM_WITHDRAWAL."""
    pass


class InvalidDestinationError(WithdrawalsServiceError):
    """Raised when no payout destination is given."""
    pass


class InvalidDecisionError(WithdrawalsServiceError):
    """Raised when a withdrawal decision is neither approve nor reject."""
    pass


class WithdrawalNotFoundError(WithdrawalsServiceError):
    """Raised when a withdrawal request does not exist."""
    pass


class AlreadyProcessedError(WithdrawalsServiceError):
    """Raised when processing a withdrawal that is no longer pending."""
    pass


class InsufficientPermissionsError(WithdrawalsServiceError):
    """Raised when a non-staff account tries to process a withdrawal."""
    pass


__all__ = [
    'WithdrawalsServiceError',
    'BelowMinimumError',
    'InvalidDestinationError',
    'InvalidDecisionError',
    'WithdrawalNotFoundError',
    'AlreadyProcessedError',
    'InsufficientPermissionsError',
    'InsufficientBalanceError',
]
