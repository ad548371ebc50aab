"""
Total amount extraction.

Tiers, each tried only when the previous found nothing:
1. labeled  - lines mentioning "total", any amount (confidence 95)
2. tail     - last 10 lines, amounts >= 1000 (confidence 75)
3. fallback - every line, amounts in [1000, 999999999] (confidence 50)
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from movement_extractor.services.cascade import (
    Tier,
    all_lines,
    last_lines,
    lines_matching,
    run_cascade,
)
from movement_extractor.services.patterns import TOTAL_LINE_PATTERN
from movement_extractor.utils.candidates import AmountCandidate
from movement_extractor.utils.money import (
    MAX_CANDIDATE_AMOUNT,
    extract_amounts_from_line,
    format_money,
)
from movement_extractor.utils.scoring import select_best_amount

logger = logging.getLogger(__name__)

TAIL_LINE_COUNT = 10
LARGE_AMOUNT = Decimal('1000')

AMOUNT_TIERS = (
    Tier(
        name='labeled',
        confidence=95,
        select_lines=lines_matching(TOTAL_LINE_PATTERN),
    ),
    Tier(
        name='tail',
        confidence=75,
        select_lines=last_lines(TAIL_LINE_COUNT),
        accept=lambda value: value >= LARGE_AMOUNT,
    ),
    Tier(
        name='fallback',
        confidence=50,
        select_lines=all_lines,
        accept=lambda value: LARGE_AMOUNT <= value <= MAX_CANDIDATE_AMOUNT,
    ),
)


def collect_amount_candidates(lines: Sequence[str]) -> List[AmountCandidate]:
    """Candidates from the first productive amount tier."""
    return run_cascade(AMOUNT_TIERS, lines, extract_amounts_from_line, AmountCandidate)


def extract_amount(lines: Sequence[str]) -> Optional[AmountCandidate]:
    """
    Pick the most likely total amount.

    Args:
        lines: Normalized document lines

    Returns:
        Winning AmountCandidate or None
    """
    candidates = collect_amount_candidates(lines)
    best = select_best_amount(candidates)

    if best is None:
        logger.debug("No amount candidate found")
        return None

    logger.debug("Amount selected", extra={
        "amount": format_money(best.value),
        "confidence": best.confidence,
        "tier": best.tier,
        "line_index": best.line_index,
        "candidates": len(candidates),
    })
    return best
