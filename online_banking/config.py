"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class BankingConfig(BaseSettings):
    """Online banking ledger configuration"""
    
    model_config = SettingsConfigDict(
        env_prefix="BANKING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr
    
    # Business rules configuration
    min_account_balance: str = "0.00"  # Minimum opening balance
    max_transaction_amount: Optional[str] = None  # If None, no per-transaction limit
    
    # Feature flags
    enable_operation_logging: bool = True


# Global configuration instance
config = BankingConfig()


def get_config() -> BankingConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankingConfig:
    """Reload configuration from environment"""
    global config
    config = BankingConfig()
    return config
