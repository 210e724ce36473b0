"""
Online Banking Ledger

An in-memory ledger of accounts with deposits, withdrawals, atomic
transfers and append-only per-account transaction histories. All
monetary values use Decimal.
"""

from .accounts import Account, AccountSummary
from .errors import (
    LedgerError, AccountNotFound, AccountAlreadyExists,
    InsufficientFunds, InvalidAmount, InvalidTransfer
)
from .history import TransactionKind, TransactionRecord, TransactionHistory
from .ledger import Ledger

__version__ = "1.0.0"

__all__ = [
    "Account",
    "AccountSummary",
    "Ledger",
    "TransactionKind",
    "TransactionRecord",
    "TransactionHistory",
    "LedgerError",
    "AccountNotFound",
    "AccountAlreadyExists",
    "InsufficientFunds",
    "InvalidAmount",
    "InvalidTransfer",
]
