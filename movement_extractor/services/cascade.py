"""
Tiered candidate cascades.

A cascade is an ordered tuple of tiers. Each tier picks the lines it scans
and filters the values found there; a tier runs only when every earlier
tier produced no candidates.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Sequence, Tuple, TypeVar

from movement_extractor.utils.candidates import Candidate

logger = logging.getLogger(__name__)

C = TypeVar('C', bound=Candidate)

# (line_index, line) pairs a tier will scan
LineSelector = Callable[[Sequence[str]], Iterable[Tuple[int, str]]]


@dataclass(frozen=True)
class Tier:
    """One strategy in a cascade."""
    name: str
    confidence: int
    select_lines: LineSelector
    accept: Callable[[object], bool] = lambda value: True


def all_lines(lines: Sequence[str]) -> Iterable[Tuple[int, str]]:
    return enumerate(lines)


def lines_matching(pattern) -> LineSelector:
    """Lines where a compiled pattern is found."""
    def select(lines: Sequence[str]) -> Iterable[Tuple[int, str]]:
        return ((i, line) for i, line in enumerate(lines) if pattern.search(line))
    return select


def first_lines(count: int) -> LineSelector:
    def select(lines: Sequence[str]) -> Iterable[Tuple[int, str]]:
        return enumerate(lines[:count])
    return select


def last_lines(count: int) -> LineSelector:
    def select(lines: Sequence[str]) -> Iterable[Tuple[int, str]]:
        start = max(0, len(lines) - count)
        return ((start + i, line) for i, line in enumerate(lines[start:]))
    return select


def run_cascade(
    tiers: Sequence[Tier],
    lines: Sequence[str],
    extract_values: Callable[[str], List],
    make_candidate: Callable[..., C],
) -> List[C]:
    """
    Run tiers in order and return the candidates of the first productive tier.

    Args:
        tiers: Ordered tiers
        lines: Normalized document lines
        extract_values: Parses the values found on a single line
        make_candidate: Candidate constructor (value, confidence, source_line,
            line_index, tier)

    Returns:
        Candidates from the first tier that found any, else an empty list
    """
    for tier in tiers:
        candidates = [
            make_candidate(
                value=value,
                confidence=tier.confidence,
                source_line=line,
                line_index=index,
                tier=tier.name,
            )
            for index, line in tier.select_lines(lines)
            for value in extract_values(line)
            if tier.accept(value)
        ]

        if candidates:
            logger.debug("Cascade tier produced candidates", extra={
                "tier": tier.name,
                "count": len(candidates),
            })
            return candidates

        logger.debug("Cascade tier empty", extra={"tier": tier.name})

    return []
