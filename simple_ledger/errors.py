"""
Ledger Error Types

Every failure the ledger reports to its callers is a LedgerError carrying
an ErrorKind, so transport layers can branch on the kind rather than on
message text.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Caller-visible failure kinds"""
    ACCOUNT_NOT_FOUND = "account_not_found"
    INVALID_AMOUNT = "invalid_amount"
    LIMIT_EXCEEDED = "limit_exceeded"
    SAME_ACCOUNT = "same_account"
    INVALID_CONFIGURATION = "invalid_configuration"


class LedgerError(ValueError):
    """Base class for all ledger failures"""

    kind: ErrorKind
    default_message: str = "Ledger operation failed."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "detail": self.message}


class AccountNotFoundError(LedgerError):
    kind = ErrorKind.ACCOUNT_NOT_FOUND
    default_message = "Account does not exist."


class InvalidAmountError(LedgerError):
    kind = ErrorKind.INVALID_AMOUNT
    default_message = "Specified money must be positive."


class LimitExceededError(LedgerError):
    kind = ErrorKind.LIMIT_EXCEEDED
    default_message = "Unable to perform the operation due to account limits."


class SameAccountError(LedgerError):
    kind = ErrorKind.SAME_ACCOUNT
    default_message = "Source and target accounts must be different."


class InvalidConfigurationError(LedgerError):
    """Raised at ledger construction when the balance limits are unusable"""
    kind = ErrorKind.INVALID_CONFIGURATION
    default_message = "Invalid ledger configuration."
