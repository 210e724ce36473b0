"""
Amount Handling Module

Converts caller-supplied amounts to Decimal and validates them. Floats are
converted through their string form so 0.1 stays 0.1. No rounding is applied.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union
import re

from .errors import InvalidAmount

AmountLike = Union[Decimal, int, float, str]


# Optional sign and currency symbol, then one of: comma-grouped thousands,
# a one or two digit decimal comma, or a plain decimal. Optional trailing
# symbol or ISO code. Anything else is rejected.
_AMOUNT_PATTERN = re.compile(
    r'^(?P<sign>[+-]?)\s*[$£€¥]?\s*'
    r'(?:(?P<grouped>\d{1,3}(?:,\d{3})+(?:\.\d+)?)'
    r'|(?P<comma_decimal>\d+,\d{1,2})'
    r'|(?P<plain>\d+(?:\.\d*)?|\.\d+))'
    r'\s*(?:[$£€¥]|[A-Za-z]{3})?$'
)


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats
    
    Accepts "1000", "-12.50", "$1,000.25", "12,5" and "250 USD". Thousands
    separators must sit in groups of three; exponents are not accepted.
    
    Args:
        value: String representation of number
        
    Returns:
        Decimal value
        
    Raises:
        InvalidAmount: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise InvalidAmount("Amount must be a non-empty string")
    
    match = _AMOUNT_PATTERN.match(value.strip())
    if not match:
        raise InvalidAmount(f"Cannot convert '{value}' to an amount")
    
    if match.group('grouped'):
        number = match.group('grouped').replace(',', '')
    elif match.group('comma_decimal'):
        number = match.group('comma_decimal').replace(',', '.')
    else:
        number = match.group('plain')
    
    try:
        return Decimal(match.group('sign') + number)
    except InvalidOperation:
        raise InvalidAmount(f"Cannot convert '{value}' to an amount") from None


def to_amount(value: AmountLike) -> Decimal:
    """
    Convert a number or numeric string to a finite Decimal
    
    Raises:
        InvalidAmount: For booleans, non-numeric input, NaN and infinities
    """
    if isinstance(value, bool):
        raise InvalidAmount(f"Invalid amount: {value!r}")
    
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = decimal_from_string(value)
    else:
        raise InvalidAmount(f"Invalid amount: {value!r}")
    
    if not amount.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {value!r}")
    return amount


def require_positive(value: AmountLike, limit: Optional[Decimal] = None) -> Decimal:
    """
    Convert value and check it is strictly positive and within limit
    
    Args:
        value: Amount supplied by the caller
        limit: Optional maximum accepted amount
        
    Returns:
        The amount as Decimal
        
    Raises:
        InvalidAmount: If the amount is zero, negative or above limit
    """
    amount = to_amount(value)
    if amount <= Decimal('0'):
        raise InvalidAmount(f"Amount must be positive, got {amount}")
    if limit is not None and amount > limit:
        raise InvalidAmount(f"Amount {amount} exceeds the transaction limit of {limit}")
    return amount
