"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class InvalidReferralCodeError(AccountsServiceError):
    """Raised when a signup referral code does not match any account."""
    pass
