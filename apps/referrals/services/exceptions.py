"""
Domain exceptions for referrals app.

Raised by the ledger and referral services and translated to HTTP
responses in views.
"""


class ReferralsServiceError(Exception):
    """Base exception for all referrals service errors."""
    pass


class AccountNotFoundError(ReferralsServiceError):
    """Raised when a ledger account does not exist."""
    pass


class InvalidAmountError(ReferralsServiceError):
    """Raised when a credit or debit amount is not a positive integer."""
    pass


class InvalidLedgerFieldError(ReferralsServiceError):
    """Raised when crediting a field that is not an earnings field."""
    pass


class InsufficientBalanceError(ReferralsServiceError):
    """Raised when a debit exceeds the current wallet balance."""
    pass


class ReferralCodeGenerationError(ReferralsServiceError):
    """Raised when no unique referral code could be generated."""
    pass
