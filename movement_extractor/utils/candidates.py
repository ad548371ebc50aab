"""
Candidate dataclasses for extraction selection.

Each candidate is a provisional value found on one line, carrying the
confidence of the cascade tier that produced it.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class Candidate:
    """Base class for extraction candidates."""
    value: Any
    confidence: int  # 0-100, fixed per cascade tier
    source_line: str = ""
    line_index: int = -1
    tier: str = ""


@dataclass(frozen=True)
class AmountCandidate(Candidate):
    """Candidate for the movement total."""
    value: Decimal


@dataclass(frozen=True)
class DateCandidate(Candidate):
    """Candidate for the transaction date."""
    value: date
