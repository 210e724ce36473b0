"""
Transaction History Module

Append-only, per-account log of balance-affecting events. Records are
immutable once written and are kept in the order they were appended.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple
from enum import Enum


class TransactionKind(Enum):
    """Kinds of balance-affecting events"""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER_OUT = "transfer_out"
    TRANSFER_IN = "transfer_in"


@dataclass(frozen=True)
class TransactionRecord:
    """
    One entry in an account's history.
    Unpacks as a ``(label, amount)`` pair.
    """
    kind: TransactionKind
    label: str
    amount: Decimal
    counterparty_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    
    @classmethod
    def deposit(cls, amount: Decimal) -> 'TransactionRecord':
        return cls(TransactionKind.DEPOSIT, "Deposit", amount)
    
    @classmethod
    def withdrawal(cls, amount: Decimal) -> 'TransactionRecord':
        return cls(TransactionKind.WITHDRAWAL, "Withdrawal", amount)
    
    @classmethod
    def transfer_out(cls, to_account_id: str, amount: Decimal) -> 'TransactionRecord':
        return cls(TransactionKind.TRANSFER_OUT, f"Transfer to {to_account_id}", amount, to_account_id)
    
    @classmethod
    def transfer_in(cls, from_account_id: str, amount: Decimal) -> 'TransactionRecord':
        return cls(TransactionKind.TRANSFER_IN, f"Transfer from {from_account_id}", amount, from_account_id)
    
    def as_tuple(self) -> Tuple[str, Decimal]:
        """Get the (label, amount) pair"""
        return (self.label, self.amount)
    
    def __iter__(self) -> Iterator:
        return iter(self.as_tuple())
    
    def __str__(self) -> str:
        return f"{self.label}: {self.amount}"


class TransactionHistory:
    """Ordered, append-only sequence of TransactionRecord for one account"""
    
    def __init__(self, account_id: str):
        self.account_id = account_id
        self._records: List[TransactionRecord] = []
    
    def append(self, record: TransactionRecord) -> None:
        """Append a record to the end of the history"""
        self._records.append(record)
    
    @property
    def records(self) -> Tuple[TransactionRecord, ...]:
        """Snapshot of all records in chronological order"""
        return tuple(self._records)
    
    def __len__(self) -> int:
        return len(self._records)
    
    def __iter__(self) -> Iterator[TransactionRecord]:
        return iter(self.records)
    
    def __repr__(self) -> str:
        return f"TransactionHistory(account_id={self.account_id!r}, records={len(self._records)})"
