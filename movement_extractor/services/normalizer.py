"""
Text normalization ahead of field extraction.
"""

import re
from typing import List, NamedTuple, Optional

_WHITESPACE = re.compile(r'\s+')


class NormalizedText(NamedTuple):
    """Two views of the same OCR text."""
    flat: str  # whitespace runs collapsed to single spaces
    lines: List[str]  # trimmed lines, in document order


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(' ', text).strip()


def normalize_text(text: Optional[str]) -> NormalizedText:
    """
    Normalize raw OCR text.

    Blank lines inside the text are kept so line indices match the
    document; leading and trailing blank lines are dropped.

    Args:
        text: Raw OCR text (None is treated as empty)

    Returns:
        NormalizedText with the flattened and line-indexed forms
    """
    if not text:
        return NormalizedText(flat='', lines=[])

    lines = [line.strip() for line in text.strip().splitlines()]
    return NormalizedText(flat=collapse_whitespace(text), lines=lines)
