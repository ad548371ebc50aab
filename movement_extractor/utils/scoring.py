"""
Selection functions for extraction candidates.

Candidates are ranked by confidence; candidates whose confidences are
within TIE_WINDOW of each other are ordered by a field-specific
tie-break instead.
"""

from datetime import date
from functools import cmp_to_key
from typing import Callable, List, Optional, TypeVar

from .candidates import Candidate, AmountCandidate, DateCandidate

__all__ = [
    'TIE_WINDOW',
    'rank_candidates', 'select_best_candidate',
    'select_best_amount', 'select_best_date',
]

T = TypeVar('T', bound=Candidate)

# Confidence gap at or below which two candidates count as tied
TIE_WINDOW = 10


def _compare(a: Candidate, b: Candidate, tie_break: Callable[[Candidate, Candidate], int]) -> int:
    if abs(a.confidence - b.confidence) > TIE_WINDOW:
        return b.confidence - a.confidence
    return tie_break(a, b)


def rank_candidates(
    candidates: List[T],
    tie_break: Callable[[T, T], int]
) -> List[T]:
    """
    Order candidates best-first.

    Args:
        candidates: Candidates to rank
        tie_break: cmp-style function used when confidences are within
            TIE_WINDOW (negative means the first argument ranks higher)

    Returns:
        New list, best candidate first
    """
    return sorted(candidates, key=cmp_to_key(lambda a, b: _compare(a, b, tie_break)))


def select_best_candidate(
    candidates: List[T],
    tie_break: Callable[[T, T], int]
) -> Optional[T]:
    """Best candidate under the tie-window ranking, or None if empty."""
    if not candidates:
        return None
    return rank_candidates(candidates, tie_break)[0]


def _prefer_larger_value(a: AmountCandidate, b: AmountCandidate) -> int:
    # Ties are usually subtotal/tax against the total; the total is largest
    if a.value > b.value:
        return -1
    if a.value < b.value:
        return 1
    return 0


def _prefer_closest_to(today: date) -> Callable[[DateCandidate, DateCandidate], int]:
    def tie_break(a: DateCandidate, b: DateCandidate) -> int:
        return abs((a.value - today).days) - abs((b.value - today).days)
    return tie_break


def select_best_amount(candidates: List[AmountCandidate]) -> Optional[AmountCandidate]:
    """
    Select best amount candidate.

    Within the tie window the larger value wins.

    Args:
        candidates: List of AmountCandidate objects

    Returns:
        Best candidate or None
    """
    return select_best_candidate(candidates, _prefer_larger_value)


def select_best_date(
    candidates: List[DateCandidate],
    today: date
) -> Optional[DateCandidate]:
    """
    Select best date candidate.

    Within the tie window the date closest to today wins.

    Args:
        candidates: List of DateCandidate objects
        today: Reference date for the proximity tie-break

    Returns:
        Best candidate or None
    """
    return select_best_candidate(candidates, _prefer_closest_to(today))
