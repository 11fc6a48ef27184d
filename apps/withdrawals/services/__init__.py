"""
Withdrawals service layer.

Request creation for account owners and approval/rejection for staff.
"""

from .exceptions import (
    WithdrawalsServiceError,
    BelowMinimumError,
    InvalidDestinationError,
    InvalidDecisionError,
    WithdrawalNotFoundError,
    AlreadyProcessedError,
    InsufficientPermissionsError,
    InsufficientBalanceError,
)

from .withdrawal_processing import (
    INSUFFICIENT_BALANCE_REASON,
    WithdrawalDecision,
    request_withdrawal,
    process_withdrawal,
)

from .notifications import notify_withdrawal_processed

__all__ = [
    # Exceptions
    'WithdrawalsServiceError',
    'BelowMinimumError',
    'InvalidDestinationError',
    'InvalidDecisionError',
    'WithdrawalNotFoundError',
    'AlreadyProcessedError',
    'InsufficientPermissionsError',
    'InsufficientBalanceError',
    # Workflow
    'INSUFFICIENT_BALANCE_REASON',
    'WithdrawalDecision',
    'request_withdrawal',
    'process_withdrawal',
    'notify_withdrawal_processed',
]
