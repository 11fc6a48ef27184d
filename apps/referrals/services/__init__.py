"""
Referrals app services layer.

Ledger mutations are single atomic UPDATE statements; multi-account
workflows compose them inside one transaction.
"""

from .exceptions import (
    ReferralsServiceError,
    AccountNotFoundError,
    InvalidAmountError,
    InvalidLedgerFieldError,
    InsufficientBalanceError,
    ReferralCodeGenerationError,
)

from .referral_graph import (
    MAX_UPLINE_DEPTH,
    walk_upline,
    resolve_direct_referrer,
    resolve_upline,
)

from .ledger import (
    credit,
    debit,
)

from .referral_codes import (
    generate_referral_code,
)

from .dashboard import (
    get_dashboard,
)


__all__ = [
    # Exceptions
    'ReferralsServiceError',
    'AccountNotFoundError',
    'InvalidAmountError',
    'InvalidLedgerFieldError',
    'InsufficientBalanceError',
    'ReferralCodeGenerationError',

    # Referral graph
    'MAX_UPLINE_DEPTH',
    'walk_upline',
    'resolve_direct_referrer',
    'resolve_upline',

    # Ledger
    'credit',
    'debit',

    # Referral codes
    'generate_referral_code',

    # Dashboard
    'get_dashboard',
]
