"""
Money token parsing with multi-locale support.

Handles the number shapes found on Latin American receipts:
- US: 1,234.56
- European: 1.234,56
- Decimal comma without grouping: 44017,00
- Bare integers: 1234
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional
import re

# Bounds for any amount carried by an extracted movement
MIN_AMOUNT = Decimal('0.01')
MAX_AMOUNT = Decimal('999999999.99')

# Bounds for a numeric token to count as an amount candidate
MIN_CANDIDATE_AMOUNT = Decimal('100')
MAX_CANDIDATE_AMOUNT = Decimal('999999999')

# Grouped number, number with two decimals, or bare integer of 3+ digits.
AMOUNT_TOKEN_PATTERN = re.compile(
    r'(?<![\d.,])'
    r'(\d{1,3}(?:[.,]\d{3})+(?:[.,]\d{2})?|\d+[.,]\d{2}|\d{3,})'
    r'(?!\d)'
)


class MoneyFormat(Enum):
    """Money format locale hints."""
    US = "US"  # 1,234.56
    EUROPEAN = "EUROPEAN"  # 1.234,56 or 44017,00


def detect_money_format(amount_str: str) -> MoneyFormat:
    """
    Detect the decimal separator of a numeric token.

    A comma followed by exactly two trailing digits is a decimal comma;
    anything else is read with commas as thousands separators.
    """
    if re.search(r',\d{2}$', amount_str):
        return MoneyFormat.EUROPEAN
    return MoneyFormat.US


def parse_amount_token(amount_str: str) -> Optional[Decimal]:
    """
    Parse a numeric token into a Decimal.

    Args:
        amount_str: Token such as "1,234.56", "1.234,56" or "44017,00"

    Returns:
        Decimal amount or None if the token is not numeric

    Examples:
        >>> parse_amount_token("1,234.56")
        Decimal('1234.56')
        >>> parse_amount_token("44017,00")
        Decimal('44017.00')
    """
    if not amount_str or not isinstance(amount_str, str):
        return None

    cleaned = amount_str.strip()

    if detect_money_format(cleaned) == MoneyFormat.EUROPEAN:
        cleaned = _strip_european_grouping(cleaned)
    else:
        cleaned = cleaned.replace(',', '')

    try:
        value = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None

    if not value.is_finite():
        return None
    return value


def _strip_european_grouping(amount_str: str) -> str:
    """
    Normalize European format: 1.234,56 -> 1234.56

    - Dot or comma as thousands separator
    - Final comma as decimal separator
    """
    whole, decimals = amount_str[:-3], amount_str[-2:]
    whole = whole.replace(',', '').replace('.', '')
    return f"{whole}.{decimals}"


def parse_decimal(value_str: str) -> Optional[Decimal]:
    """
    Parse a captured numeric group by dropping every comma.

    Used for auxiliary fields (subtotal, tax) where the capture is already
    anchored to a label.
    """
    if not value_str:
        return None
    try:
        value = Decimal(value_str.replace(',', '').strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def is_valid_amount(value: Optional[Decimal]) -> bool:
    """Whether a value can be carried as a movement amount."""
    return value is not None and MIN_AMOUNT <= value <= MAX_AMOUNT


def extract_amounts_from_line(line: str) -> List[Decimal]:
    """
    Extract candidate amounts from one line of text.

    Values are deduplicated within the line, keep their order of
    appearance, and must fall in the candidate range.

    Args:
        line: A single line of OCR text

    Returns:
        List of distinct Decimal amounts
    """
    amounts: List[Decimal] = []

    for match in AMOUNT_TOKEN_PATTERN.finditer(line):
        value = parse_amount_token(match.group(1))

        if value is None:
            continue
        if not MIN_CANDIDATE_AMOUNT <= value <= MAX_CANDIDATE_AMOUNT:
            continue
        if value not in amounts:
            amounts.append(value)

    return amounts


def format_money(amount: Decimal, currency: str = 'MXN') -> str:
    """
    Format Decimal amount as money string for log messages.

    Examples:
        >>> format_money(Decimal('1234.56'))
        '$1,234.56'
    """
    if amount is None:
        return 'N/A'

    symbol_map = {
        'MXN': '$',
        'ARS': '$',
        'USD': '$',
        'EUR': '€',
    }
    symbol = symbol_map.get(currency.upper(), currency)

    return f"{symbol}{float(amount):,.2f}"
