"""
Account Module

A balance-holding entity with an identifier, holder name and password.
Balance mutation happens only through deposit/withdraw/transfer_to, each
under the account's own lock, and the balance can never go below zero.
"""

from decimal import Decimal
from contextlib import contextmanager, ExitStack
from typing import NamedTuple
import threading

from .amounts import AmountLike, require_positive, to_amount
from .errors import LedgerError, InvalidAmount, InvalidTransfer


class AccountSummary(NamedTuple):
    """Public view of an account used for listings"""
    account_id: str
    holder_name: str


@contextmanager
def lock_accounts(*accounts: 'Account'):
    """
    Acquire the locks of all given accounts in ascending account id order.
    The same account listed twice is locked once.
    """
    unique = {account.account_id: account for account in accounts}
    with ExitStack() as stack:
        for account_id in sorted(unique):
            stack.enter_context(unique[account_id]._lock)
        yield


class Account:
    """
    Bank account holding a non-negative Decimal balance
    """
    
    def __init__(self, account_id: str, holder_name: str, balance: Decimal, password: str):
        if not isinstance(balance, Decimal) or not balance.is_finite():
            raise InvalidAmount(f"Balance must be a finite Decimal, got {balance!r}", account_id=account_id)
        if balance < Decimal('0'):
            raise InvalidAmount(f"Balance cannot be negative, got {balance}", account_id=account_id)
        
        self._account_id = account_id
        self._holder_name = holder_name
        self._balance = balance
        self._password = password
        self._lock = threading.RLock()
    
    @classmethod
    def create(
        cls,
        account_id: str,
        holder_name: str,
        initial_balance: AmountLike,
        password: str,
        min_balance: Decimal = Decimal('0')
    ) -> 'Account':
        """
        Create a new account
        
        Args:
            account_id: Unique account identifier
            holder_name: Display name of the account holder
            initial_balance: Opening balance
            password: Plaintext credential, compared by exact match
            min_balance: Lowest accepted opening balance (never below zero)
            
        Returns:
            Created Account object
            
        Raises:
            LedgerError: If account_id is blank
            InvalidAmount: If initial_balance is not a number or below min_balance
        """
        if not isinstance(account_id, str) or not account_id.strip():
            raise LedgerError("Account id must be a non-empty string")
        
        balance = to_amount(initial_balance)
        floor = max(min_balance, Decimal('0'))
        if balance < floor:
            raise InvalidAmount(
                f"Initial balance {balance} is below the minimum of {floor}",
                account_id=account_id
            )
        
        return cls(account_id, holder_name, balance, password)
    
    @property
    def account_id(self) -> str:
        return self._account_id
    
    @property
    def holder_name(self) -> str:
        return self._holder_name
    
    @property
    def balance(self) -> Decimal:
        """Current balance (read-only)"""
        with self._lock:
            return self._balance
    
    def verify_password(self, candidate: str) -> bool:
        """Check candidate against the stored password by exact equality"""
        return self._password == candidate
    
    def deposit(self, amount: AmountLike) -> Decimal:
        """
        Add a positive amount to the balance
        
        Returns:
            New balance
            
        Raises:
            InvalidAmount: If amount is not strictly positive
        """
        value = require_positive(amount)
        with self._lock:
            self._balance += value
            return self._balance
    
    def withdraw(self, amount: AmountLike) -> bool:
        """
        Subtract amount if the balance covers it
        
        Returns:
            True if withdrawn, False if funds are insufficient (balance unchanged)
            
        Raises:
            InvalidAmount: If amount is not strictly positive
        """
        value = require_positive(amount)
        with self._lock:
            if self._balance >= value:
                self._balance -= value
                return True
            return False
    
    def transfer_to(self, target: 'Account', amount: AmountLike) -> bool:
        """
        Move amount from this account to target as one unit
        
        Both accounts are locked for the whole move. If the deposit side
        fails the withdrawn amount is put back before the error propagates.
        
        Returns:
            True if transferred, False if funds are insufficient
            
        Raises:
            InvalidAmount: If amount is not strictly positive
            InvalidTransfer: If target is this account
        """
        if target is self or target.account_id == self.account_id:
            raise InvalidTransfer("Cannot transfer to the same account", account_id=self.account_id)
        
        value = require_positive(amount)
        with lock_accounts(self, target):
            if not self.withdraw(value):
                return False
            try:
                target.deposit(value)
            except Exception:
                self._balance += value
                raise
            return True
    
    def summary(self) -> AccountSummary:
        """Get the (account_id, holder_name) view of this account"""
        return AccountSummary(self._account_id, self._holder_name)
    
    def __repr__(self) -> str:
        return f"Account(account_id={self._account_id!r}, holder_name={self._holder_name!r})"
