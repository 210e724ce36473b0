"""
Ledger Module

Owns every account and its transaction history, keyed by account id.
Each operation either completes fully or raises a LedgerError and leaves
balances and histories exactly as they were.
"""

from decimal import Decimal
from typing import Dict, List, Optional, Tuple
import threading

from .accounts import Account, AccountSummary, lock_accounts
from .amounts import AmountLike, require_positive, to_amount
from .config import BankingConfig, get_config
from .errors import (
    LedgerError, AccountNotFound, AccountAlreadyExists,
    InsufficientFunds, InvalidTransfer
)
from .history import TransactionHistory, TransactionRecord
from .logging_config import get_logger, log_action, setup_logging_from_config


class Ledger:
    """
    In-memory ledger of accounts and their append-only histories
    
    The accounts and histories maps always hold the same set of ids; both
    entries are created together and neither is ever removed.
    """
    
    def __init__(self, config: Optional[BankingConfig] = None, configure_logging: bool = False):
        """
        Args:
            config: Settings for this ledger (global config if omitted)
            configure_logging: Install the log handler described by the config's
                log_level, log_format and log_file on the "online_banking" logger
        """
        self.config = config or get_config()
        if configure_logging:
            setup_logging_from_config(self.config)
        self.logger = get_logger("online_banking.ledger")
        
        self._accounts: Dict[str, Account] = {}
        self._histories: Dict[str, TransactionHistory] = {}
        self._lock = threading.RLock()  # Guards both maps
        
        self._min_balance = to_amount(self.config.min_account_balance)
        self._max_amount: Optional[Decimal] = None
        if self.config.max_transaction_amount:
            self._max_amount = to_amount(self.config.max_transaction_amount)
    
    def _log(self, level: str, message: str, action: str,
             account_id: Optional[str] = None, extra: Optional[dict] = None) -> None:
        if self.config.enable_operation_logging:
            log_action(self.logger, level, message, account_id=account_id,
                       action=action, extra=extra)
    
    def _log_rejected(self, action: str, error: LedgerError) -> None:
        self._log(
            "warning", f"{action} rejected: {error}", action,
            account_id=error.account_id,
            extra={"error": type(error).__name__}
        )
    
    def _get_account(self, account_id: str) -> Account:
        with self._lock:
            account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFound(f"Account {account_id} not found", account_id=account_id)
        return account
    
    def _history(self, account_id: str) -> TransactionHistory:
        with self._lock:
            return self._histories[account_id]
    
    def _validate_amount(self, amount: AmountLike, account_id: Optional[str] = None) -> Decimal:
        try:
            return require_positive(amount, self._max_amount)
        except LedgerError as e:
            e.account_id = account_id
            raise
    
    def create_account(
        self,
        account_id: str,
        holder_name: str,
        initial_balance: AmountLike,
        password: str
    ) -> AccountSummary:
        """
        Create a new account with an empty history
        
        Args:
            account_id: Unique account identifier
            holder_name: Display name of the account holder
            initial_balance: Opening balance (not recorded as a transaction)
            password: Plaintext credential
            
        Returns:
            AccountSummary of the created account
            
        Raises:
            AccountAlreadyExists: If account_id is already present
            InvalidAmount: If initial_balance is invalid or below the configured minimum
        """
        try:
            with self._lock:
                if account_id in self._accounts:
                    raise AccountAlreadyExists(
                        f"Account {account_id} already exists", account_id=account_id
                    )
                account = Account.create(
                    account_id, holder_name, initial_balance, password,
                    min_balance=self._min_balance
                )
                self._accounts[account_id] = account
                self._histories[account_id] = TransactionHistory(account_id)
        except LedgerError as e:
            self._log_rejected("create_account", e)
            raise
        
        self._log(
            "info", "Account created", "create_account", account_id=account_id,
            extra={"holder_name": holder_name, "initial_balance": str(account.balance)}
        )
        return account.summary()
    
    def deposit(self, account_id: str, amount: AmountLike) -> Decimal:
        """
        Deposit into an account and record a "Deposit" entry
        
        Returns:
            New balance
            
        Raises:
            AccountNotFound: If account_id is absent
            InvalidAmount: If amount is not positive or above the limit
        """
        try:
            account = self._get_account(account_id)
            value = self._validate_amount(amount, account_id)
            with lock_accounts(account):
                new_balance = account.deposit(value)
                self._history(account_id).append(TransactionRecord.deposit(value))
        except LedgerError as e:
            self._log_rejected("deposit", e)
            raise
        
        self._log(
            "info", "Deposit successful", "deposit", account_id=account_id,
            extra={"amount": str(value), "balance": str(new_balance)}
        )
        return new_balance
    
    def withdraw(self, account_id: str, amount: AmountLike) -> Decimal:
        """
        Withdraw from an account and record a "Withdrawal" entry
        
        Returns:
            New balance
            
        Raises:
            AccountNotFound: If account_id is absent
            InvalidAmount: If amount is not positive or above the limit
            InsufficientFunds: If the balance does not cover amount
        """
        try:
            account = self._get_account(account_id)
            value = self._validate_amount(amount, account_id)
            with lock_accounts(account):
                if not account.withdraw(value):
                    raise InsufficientFunds(
                        f"Insufficient balance in account {account_id}", account_id=account_id
                    )
                new_balance = account.balance
                self._history(account_id).append(TransactionRecord.withdrawal(value))
        except LedgerError as e:
            self._log_rejected("withdraw", e)
            raise
        
        self._log(
            "info", "Withdrawal successful", "withdraw", account_id=account_id,
            extra={"amount": str(value), "balance": str(new_balance)}
        )
        return new_balance
    
    def transfer(self, from_account_id: str, to_account_id: str,
                 amount: AmountLike) -> Tuple[Decimal, Decimal]:
        """
        Move funds between two accounts as a single all-or-nothing step
        
        Both accounts stay locked from the funds check until both history
        entries are appended.
        
        Returns:
            (new source balance, new destination balance)
            
        Raises:
            AccountNotFound: If one or both accounts are absent
            InvalidTransfer: If source and destination are the same account
            InvalidAmount: If amount is not positive or above the limit
            InsufficientFunds: If the source balance does not cover amount
        """
        try:
            with self._lock:
                missing = [i for i in (from_account_id, to_account_id) if i not in self._accounts]
                if missing:
                    raise AccountNotFound(
                        f"One or both accounts not found: {', '.join(dict.fromkeys(missing))}",
                        account_id=missing[0]
                    )
                source = self._accounts[from_account_id]
                target = self._accounts[to_account_id]
            
            if from_account_id == to_account_id:
                raise InvalidTransfer(
                    "Cannot transfer to the same account", account_id=from_account_id
                )
            value = self._validate_amount(amount, from_account_id)
            
            with lock_accounts(source, target):
                if not source.transfer_to(target, value):
                    raise InsufficientFunds(
                        f"Insufficient balance in source account {from_account_id}",
                        account_id=from_account_id
                    )
                self._history(from_account_id).append(
                    TransactionRecord.transfer_out(to_account_id, value)
                )
                self._history(to_account_id).append(
                    TransactionRecord.transfer_in(from_account_id, value)
                )
                balances = (source.balance, target.balance)
        except LedgerError as e:
            self._log_rejected("transfer", e)
            raise
        
        self._log(
            "info", "Transfer successful", "transfer", account_id=from_account_id,
            extra={
                "to_account_id": to_account_id,
                "amount": str(value),
                "from_balance": str(balances[0]),
                "to_balance": str(balances[1])
            }
        )
        return balances
    
    def check_balance(self, account_id: str) -> Decimal:
        """
        Get the current balance of an account
        
        Raises:
            AccountNotFound: If account_id is absent
        """
        try:
            return self._get_account(account_id).balance
        except LedgerError as e:
            self._log_rejected("check_balance", e)
            raise
    
    def get_transaction_history(self, account_id: str) -> List[TransactionRecord]:
        """
        Get the chronological history of an account
        
        An existing account with no activity yields an empty list.
        
        Raises:
            AccountNotFound: If account_id is absent
        """
        try:
            account = self._get_account(account_id)
        except LedgerError as e:
            self._log_rejected("get_transaction_history", e)
            raise
        with lock_accounts(account):
            return list(self._history(account_id).records)
    
    def list_accounts(self) -> List[AccountSummary]:
        """Get (account_id, holder_name) for every account in creation order"""
        with self._lock:
            return [account.summary() for account in self._accounts.values()]
    
    def verify_password(self, account_id: str, candidate: str) -> bool:
        """
        Check a password against an account's stored credential
        
        Raises:
            AccountNotFound: If account_id is absent
        """
        try:
            account = self._get_account(account_id)
        except LedgerError as e:
            self._log_rejected("verify_password", e)
            raise
        verified = account.verify_password(candidate)
        if not verified:
            self._log("warning", "Password verification failed", "verify_password",
                      account_id=account_id)
        return verified
    
    def __contains__(self, account_id: object) -> bool:
        with self._lock:
            return account_id in self._accounts
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)
