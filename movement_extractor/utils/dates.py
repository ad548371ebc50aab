"""
Date token parsing for receipt text.

Handles the numeric layouts used on Latin American receipts:
- DD/MM/YYYY, DD-MM-YYYY
- DD/MM/YY, DD-MM-YY (two-digit years pivot at 50)
- YYYY-MM-DD
- Spanish long form: "15 de marzo de 2024"
"""

from datetime import date
from typing import List, Optional
import re

# Dates further ahead than this are due dates or expiry dates, not the purchase
MAX_FUTURE_DAYS = 365

# Two-digit years below the pivot belong to the 2000s
YEAR_PIVOT = 50

ISO_DATE_PATTERN = re.compile(r'(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)')
DAY_FIRST_DATE_PATTERN = re.compile(r'(?<!\d)(\d{1,2})([/-])(\d{1,2})\2(\d{4}|\d{2})(?!\d)')
LONG_DATE_PATTERN = re.compile(
    r'(?<!\d)(\d{1,2})\s+de\s+([a-záéíóú]+)\s+(?:de|del)\s+(\d{4})(?!\d)',
    re.IGNORECASE
)

SPANISH_MONTHS = {
    'enero': 1,
    'febrero': 2,
    'marzo': 3,
    'abril': 4,
    'mayo': 5,
    'junio': 6,
    'julio': 7,
    'agosto': 8,
    'septiembre': 9,
    'setiembre': 9,
    'octubre': 10,
    'noviembre': 11,
    'diciembre': 12,
}


def expand_year(year: int) -> int:
    """
    Expand a two-digit year.

    Examples:
        >>> expand_year(24)
        2024
        >>> expand_year(99)
        1999
    """
    if year >= 100:
        return year
    return 2000 + year if year < YEAR_PIVOT else 1900 + year


def build_date(year: int, month: int, day: int) -> Optional[date]:
    """Build a calendar date, or None if the parts are impossible."""
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_date_token(date_str: str) -> Optional[date]:
    """
    Parse a single date token into a date.

    Args:
        date_str: Token such as "15/03/2024", "15-03-24" or "2024-03-15"

    Returns:
        Parsed date or None
    """
    if not date_str:
        return None

    date_str = date_str.strip()

    match = ISO_DATE_PATTERN.fullmatch(date_str)
    if match:
        year, month, day = (int(part) for part in match.groups())
        return build_date(year, month, day)

    match = DAY_FIRST_DATE_PATTERN.fullmatch(date_str)
    if match:
        day, _, month, year = match.groups()
        return build_date(expand_year(int(year)), int(month), int(day))

    match = LONG_DATE_PATTERN.fullmatch(date_str)
    if match:
        day, month_name, year = match.groups()
        month = SPANISH_MONTHS.get(month_name.lower())
        if month is None:
            return None
        return build_date(int(year), month, int(day))

    return None


def is_plausible_transaction_date(value: date, today: date) -> bool:
    """
    Reject dates too far in the future to be the purchase date.

    No lower bound is applied.
    """
    return (value - today).days <= MAX_FUTURE_DAYS


def extract_dates_from_line(line: str, today: date) -> List[date]:
    """
    Extract plausible transaction dates from one line of text.

    Args:
        line: A single line of OCR text
        today: Reference date for the future-date filter

    Returns:
        List of distinct dates in order of appearance
    """
    found = []
    for pattern in (ISO_DATE_PATTERN, DAY_FIRST_DATE_PATTERN, LONG_DATE_PATTERN):
        for match in pattern.finditer(line):
            found.append((match.start(), match.group(0)))

    dates: List[date] = []
    for _, token in sorted(found):
        parsed = parse_date_token(token)

        if parsed is None:
            continue
        if not is_plausible_transaction_date(parsed, today):
            continue
        if parsed not in dates:
            dates.append(parsed)

    return dates
