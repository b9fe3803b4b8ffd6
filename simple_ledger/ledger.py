"""
Ledger Engine

Owns every account, assigns account ids and applies balance changes under
the configured [min_balance, max_balance] limits.

Each mutating operation validates against a consistent snapshot of the
affected accounts and then applies its writes, all inside one critical
section on the ledger lock. A transfer therefore either updates both
accounts or neither, and no reader ever observes only one side of it.
"""

import threading
from typing import Any, Callable, Dict, TYPE_CHECKING

from .accounts import Account
from .errors import (
    LedgerError, AccountNotFoundError, InvalidAmountError,
    LimitExceededError, SameAccountError, InvalidConfigurationError
)
from .logging_config import get_logger, log_action

if TYPE_CHECKING:
    from .config import LedgerConfig


class Ledger:
    """
    In-memory account ledger with inclusive balance limits
    """

    def __init__(self, min_balance: float = 0.0, max_balance: float = 1_000_000.0):
        """
        Args:
            min_balance: Lowest balance an account may hold (zero or less)
            max_balance: Highest balance an account may hold (positive)
        """
        if not min_balance <= 0.0:
            raise InvalidConfigurationError(
                f"Minimum balance must be zero or less, got {min_balance}"
            )
        if not max_balance > 0.0:
            raise InvalidConfigurationError(
                f"Maximum balance must be positive, got {max_balance}"
            )

        self._min_balance = float(min_balance)
        self._max_balance = float(max_balance)
        self._accounts: Dict[int, Account] = {}
        self._next_account_id = 0
        self._lock = threading.RLock()
        self.logger = get_logger("simple_ledger.ledger")

    @classmethod
    def from_config(cls, config: 'LedgerConfig') -> 'Ledger':
        """Create a ledger using the limits from configuration"""
        return cls(min_balance=config.min_balance, max_balance=config.max_balance)

    @property
    def min_balance(self) -> float:
        return self._min_balance

    @property
    def max_balance(self) -> float:
        return self._max_balance

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)

    def open_account(self, owner_id: int) -> Account:
        """
        Open an empty account for the owner

        Args:
            owner_id: Owner of the account, not validated

        Returns:
            The new Account with balance 0
        """
        with self._lock:
            account = Account(id=self._next_account_id, owner_id=owner_id, balance=0.0)
            self._next_account_id += 1
            self._accounts[account.id] = account

        log_action(
            self.logger, "info", f"Account opened: {account.id}",
            action="open_account", resource=f"account:{account.id}",
            extra={"owner_id": owner_id}
        )
        return account

    def get_account(self, account_id: int) -> Account:
        """Get account snapshot by ID"""
        with self._lock:
            return self._get_existing(account_id)

    def snapshot(self) -> Dict[int, Account]:
        """Get every account as of a single instant, keyed by id"""
        with self._lock:
            return dict(self._accounts)

    def deposit(self, account_id: int, amount: float) -> None:
        """
        Deposit a positive amount into an account

        Raises:
            InvalidAmountError: amount is zero or negative
            AccountNotFoundError: no such account
            LimitExceededError: new balance would exceed max_balance
        """
        self._run("deposit", {"account_id": account_id, "amount": amount},
                  self._apply_single, account_id, amount, amount)

    def withdraw(self, account_id: int, amount: float) -> None:
        """
        Withdraw a positive amount from an account

        Raises:
            InvalidAmountError: amount is zero or negative
            AccountNotFoundError: no such account
            LimitExceededError: new balance would fall below min_balance
        """
        self._run("withdraw", {"account_id": account_id, "amount": amount},
                  self._apply_single, account_id, amount, -amount)

    def transfer(self, source_id: int, target_id: int, amount: float) -> None:
        """
        Move a positive amount from source to target as a single unit

        A self-transfer is rejected before any other check. If either side
        would leave the limit range neither account is touched.

        Raises:
            SameAccountError: source and target are the same account
            InvalidAmountError: amount is zero or negative
            AccountNotFoundError: either account does not exist
            LimitExceededError: either balance would leave the limit range
        """
        self._run("transfer",
                  {"source_id": source_id, "target_id": target_id, "amount": amount},
                  self._apply_transfer, source_id, target_id, amount)

    def _run(self, action: str, details: Dict[str, Any],
             operation: Callable[..., None], *args: Any) -> None:
        """Execute an operation, logging its outcome"""
        try:
            operation(*args)
        except LedgerError as e:
            log_action(
                self.logger, "warning", f"{action} rejected: {e.message}",
                action=action, extra={**details, "kind": e.kind.value}
            )
            raise

        log_action(self.logger, "info", f"{action} applied", action=action, extra=details)

    def _apply_single(self, account_id: int, amount: float, delta: float) -> None:
        self._check_positive(amount)
        with self._lock:
            updated = self._validated_update(account_id, delta)
            self._accounts[account_id] = updated

    def _apply_transfer(self, source_id: int, target_id: int, amount: float) -> None:
        if source_id == target_id:
            raise SameAccountError()
        self._check_positive(amount)

        with self._lock:
            # Both sides validated before either write
            debited = self._validated_update(source_id, -amount)
            credited = self._validated_update(target_id, amount)
            self._accounts[source_id] = debited
            self._accounts[target_id] = credited

    def _validated_update(self, account_id: int, delta: float) -> Account:
        """Return the updated snapshot, or raise if it breaks the limits"""
        updated = self._get_existing(account_id).with_balance_delta(delta)
        if not self._min_balance <= updated.balance <= self._max_balance:
            raise LimitExceededError()
        return updated

    def _get_existing(self, account_id: int) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError()
        return account

    @staticmethod
    def _check_positive(amount: float) -> None:
        # NaN fails the comparison too
        if not amount > 0.0:
            raise InvalidAmountError()
