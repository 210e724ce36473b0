"""
Ledger Error Module

Domain errors raised by ledger and account operations. All of them derive
from ValueError so callers that only know about ValueError still catch them.
A failed operation never leaves partial state behind.
"""

from typing import Optional


class LedgerError(ValueError):
    """Base class for all ledger failures"""
    
    def __init__(self, message: str, account_id: Optional[str] = None):
        super().__init__(message)
        self.account_id = account_id


class AccountNotFound(LedgerError):
    """Referenced account id has no corresponding account"""


class AccountAlreadyExists(LedgerError):
    """Creation requested for an account id that is already present"""


class InsufficientFunds(LedgerError):
    """Withdrawal or transfer would drive the balance negative"""


class InvalidAmount(LedgerError):
    """Amount is not a finite positive number or exceeds the configured limit"""


class InvalidTransfer(LedgerError):
    """Transfer whose source and destination are the same account"""
