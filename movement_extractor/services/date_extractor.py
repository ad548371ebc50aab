"""
Transaction date extraction.

Tiers, each tried only when the previous found nothing:
1. labeled  - lines mentioning "fecha" / "date" (confidence 95)
2. head     - first 15 lines (confidence 75)
3. fallback - every line (confidence 50)
"""

import logging
from datetime import date
from functools import partial
from typing import List, Optional, Sequence

from movement_extractor.services.cascade import (
    Tier,
    all_lines,
    first_lines,
    lines_matching,
    run_cascade,
)
from movement_extractor.services.patterns import DATE_LINE_PATTERN
from movement_extractor.utils.candidates import DateCandidate
from movement_extractor.utils.dates import extract_dates_from_line
from movement_extractor.utils.scoring import select_best_date

logger = logging.getLogger(__name__)

HEAD_LINE_COUNT = 15

DATE_TIERS = (
    Tier(name='labeled', confidence=95, select_lines=lines_matching(DATE_LINE_PATTERN)),
    Tier(name='head', confidence=75, select_lines=first_lines(HEAD_LINE_COUNT)),
    Tier(name='fallback', confidence=50, select_lines=all_lines),
)


def collect_date_candidates(lines: Sequence[str], today: date) -> List[DateCandidate]:
    """Candidates from the first productive date tier."""
    return run_cascade(
        DATE_TIERS,
        lines,
        partial(extract_dates_from_line, today=today),
        DateCandidate,
    )


def extract_date(lines: Sequence[str], today: Optional[date] = None) -> Optional[DateCandidate]:
    """
    Pick the most likely transaction date.

    Args:
        lines: Normalized document lines
        today: Reference date (defaults to the current local date)

    Returns:
        Winning DateCandidate or None
    """
    today = today or date.today()

    candidates = collect_date_candidates(lines, today)
    best = select_best_date(candidates, today)

    if best is None:
        logger.debug("No date candidate found")
        return None

    logger.debug("Date selected", extra={
        "date": best.value.isoformat(),
        "confidence": best.confidence,
        "tier": best.tier,
        "line_index": best.line_index,
        "candidates": len(candidates),
    })
    return best
