"""
Test suite for amounts module

Tests conversion of caller input to Decimal and positive-amount validation.
"""

import pytest
from decimal import Decimal

from online_banking.amounts import decimal_from_string, to_amount, require_positive
from online_banking.config import BankingConfig
from online_banking.errors import InvalidAmount, LedgerError
from online_banking.ledger import Ledger


class TestDecimalFromString:
    """Test string parsing"""
    
    def test_plain_and_formatted_strings(self):
        """Test common numeric formats"""
        assert decimal_from_string("100.50") == Decimal('100.50')
        assert decimal_from_string("  250 ") == Decimal('250')
        assert decimal_from_string("$1,000.25") == Decimal('1000.25')
        assert decimal_from_string("12,5") == Decimal('12.5')
        assert decimal_from_string("1,000") == Decimal('1000')
        assert decimal_from_string("1,234,567.89") == Decimal('1234567.89')
        assert decimal_from_string("-12.50") == Decimal('-12.50')
        assert decimal_from_string("250 USD") == Decimal('250')
        assert decimal_from_string("€ 5") == Decimal('5')
    
    def test_invalid_strings(self):
        """Test that garbage input is rejected instead of reinterpreted"""
        with pytest.raises(InvalidAmount, match="non-empty string"):
            decimal_from_string("")
        
        for raw in ("abc", "1-2", "12abc34", "5 or 6", "1e3", "1,2345",
                    "12,34,567", "1.000,50", "NaN", "Infinity", "$", "1 2"):
            with pytest.raises(InvalidAmount, match="Cannot convert"):
                decimal_from_string(raw)
    
    def test_rejected_strings_never_reach_a_balance(self):
        """Test that malformed amounts leave a ledger account untouched"""
        ledger = Ledger(BankingConfig(_env_file=None))
        ledger.create_account("A", "Alice", Decimal('0'), "pw")
        
        for raw in ("12abc34", "5 or 6", "1e3", "1,2345"):
            with pytest.raises(InvalidAmount):
                ledger.deposit("A", raw)
        
        assert ledger.check_balance("A") == Decimal('0')
        assert ledger.get_transaction_history("A") == []


class TestToAmount:
    """Test conversion of any supported input type"""
    
    def test_supported_types(self):
        """Test int, float, str and Decimal inputs"""
        assert to_amount(500) == Decimal('500')
        assert to_amount(0.1) == Decimal('0.1')
        assert to_amount("19.99") == Decimal('19.99')
        assert to_amount(Decimal('7.25')) == Decimal('7.25')
        assert to_amount(0) == Decimal('0')
        assert to_amount(-3) == Decimal('-3')
    
    def test_float_goes_through_string_form(self):
        """Test that floats are not expanded to binary precision"""
        assert to_amount(0.1) + to_amount(0.2) == Decimal('0.3')
    
    def test_rejected_inputs(self):
        """Test booleans, None, NaN and infinities"""
        for value in (True, None, [1], float('nan'), float('inf'), Decimal('NaN'), Decimal('-Infinity')):
            with pytest.raises(InvalidAmount):
                to_amount(value)
    
    def test_invalid_amount_is_value_error(self):
        """Test that InvalidAmount is catchable as LedgerError and ValueError"""
        with pytest.raises(LedgerError):
            to_amount(None)
        with pytest.raises(ValueError):
            to_amount(None)


class TestRequirePositive:
    """Test positive amount validation"""
    
    def test_positive_amounts(self):
        assert require_positive(1) == Decimal('1')
        assert require_positive("0.01") == Decimal('0.01')
    
    def test_zero_and_negative(self):
        """Test that non-positive amounts are rejected"""
        with pytest.raises(InvalidAmount, match="must be positive"):
            require_positive(0)
        
        with pytest.raises(InvalidAmount, match="must be positive"):
            require_positive(Decimal('-5.00'))
    
    def test_limit(self):
        """Test the optional upper limit"""
        assert require_positive(100, limit=Decimal('100')) == Decimal('100')
        
        with pytest.raises(InvalidAmount, match="exceeds the transaction limit"):
            require_positive("100.01", limit=Decimal('100'))
