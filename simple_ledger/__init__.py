"""
Simple Ledger

An in-memory account ledger that opens accounts and applies deposits,
withdrawals and transfers atomically within configured balance limits.
"""

__version__ = "1.0.0"

from .accounts import Account
from .errors import (
    ErrorKind, LedgerError, AccountNotFoundError, InvalidAmountError,
    LimitExceededError, SameAccountError, InvalidConfigurationError
)
from .ledger import Ledger

__all__ = [
    "Account",
    "ErrorKind",
    "LedgerError",
    "AccountNotFoundError",
    "InvalidAmountError",
    "LimitExceededError",
    "SameAccountError",
    "InvalidConfigurationError",
    "Ledger",
]
