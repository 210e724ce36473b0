"""
Tests for environment-based configuration
"""

import pytest
from decimal import Decimal

from online_banking import config as config_module
from online_banking.config import BankingConfig, get_config, reload_config
from online_banking.ledger import Ledger
from online_banking.errors import InvalidAmount


@pytest.fixture(autouse=True)
def restore_global_config():
    original = config_module.config
    yield
    config_module.config = original


class TestBankingConfig:
    """Test configuration defaults and overrides"""
    
    def test_defaults(self, monkeypatch):
        for name in ("BANKING_LOG_LEVEL", "BANKING_MIN_ACCOUNT_BALANCE",
                     "BANKING_MAX_TRANSACTION_AMOUNT", "BANKING_LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)
        
        settings = BankingConfig(_env_file=None)
        
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.log_file is None
        assert settings.min_account_balance == "0.00"
        assert settings.max_transaction_amount is None
        assert settings.enable_operation_logging is True
    
    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("BANKING_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("BANKING_MAX_TRANSACTION_AMOUNT", "250.00")
        monkeypatch.setenv("banking_enable_operation_logging", "false")
        
        settings = BankingConfig(_env_file=None)
        
        assert settings.log_level == "DEBUG"
        assert settings.max_transaction_amount == "250.00"
        assert settings.enable_operation_logging is False
    
    def test_reload_config(self, monkeypatch):
        """Test that reload picks up new environment values"""
        monkeypatch.setenv("BANKING_MIN_ACCOUNT_BALANCE", "25.00")
        
        reloaded = reload_config()
        
        assert reloaded is get_config()
        assert get_config().min_account_balance == "25.00"
    
    def test_ledger_uses_global_config_by_default(self, monkeypatch):
        monkeypatch.setenv("BANKING_MIN_ACCOUNT_BALANCE", "10")
        reload_config()
        
        ledger = Ledger()
        
        assert ledger.config is get_config()
        with pytest.raises(InvalidAmount):
            ledger.create_account("A", "Alice", Decimal('9.99'), "pw")
    
    def test_invalid_configured_amount(self):
        """Test that a non-numeric limit is rejected when a ledger is built"""
        with pytest.raises(InvalidAmount):
            Ledger(BankingConfig(max_transaction_amount="lots"))
