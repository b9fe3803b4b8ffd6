"""
Account Snapshot Module

Accounts are immutable value snapshots. The ledger replaces an account's
snapshot on every balance change instead of mutating it, so whatever a
caller holds can never alter ledger state or change under its feet.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class Account:
    """
    Identified balance record owned by an owner id
    """
    id: int
    owner_id: int
    balance: float = 0.0

    def __post_init__(self):
        if self.id < 0:
            raise ValueError("Account id must be non-negative")

    def with_balance_delta(self, delta: float) -> 'Account':
        """Return a new snapshot with the signed delta applied"""
        return Account(id=self.id, owner_id=self.owner_id, balance=self.balance + delta)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return asdict(self)
