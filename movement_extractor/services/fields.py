"""
Label-anchored extraction for vendor and auxiliary invoice fields.

Both run over the flattened text and take the first pattern that matches.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from movement_extractor.services.normalizer import collapse_whitespace
from movement_extractor.services.patterns import (
    PatternSpec,
    VENDOR_PATTERNS,
    TAX_ID_PATTERNS,
    INVOICE_NUMBER_PATTERNS,
    SUBTOTAL_PATTERNS,
    TAX_PATTERNS,
)
from movement_extractor.utils.money import parse_decimal, is_valid_amount

logger = logging.getLogger(__name__)

VENDOR_CONFIDENCE = 75
VENDOR_MIN_LENGTH = 2  # exclusive
VENDOR_MAX_LENGTH = 100  # exclusive


@dataclass(frozen=True)
class VendorMatch:
    value: str
    confidence: int
    pattern_name: str


@dataclass(frozen=True)
class AuxiliaryFields:
    """Best-effort invoice annotations; no confidence attached."""
    tax_id: Optional[str] = None
    invoice_number: Optional[str] = None
    subtotal: Optional[Decimal] = None
    tax: Optional[Decimal] = None


def extract_vendor(flat_text: str) -> Optional[VendorMatch]:
    """
    Extract the vendor name from a labeled line.

    Args:
        flat_text: Whitespace-collapsed OCR text

    Returns:
        VendorMatch or None if no label pattern yields a usable name
    """
    for spec in VENDOR_PATTERNS:
        match = spec.compiled.search(flat_text)
        if not match or not match.group(1):
            continue

        vendor = collapse_whitespace(match.group(1))
        if VENDOR_MIN_LENGTH < len(vendor) < VENDOR_MAX_LENGTH:
            logger.debug("Vendor matched", extra={
                "vendor": vendor,
                "pattern": spec.name,
            })
            return VendorMatch(value=vendor, confidence=VENDOR_CONFIDENCE, pattern_name=spec.name)

    return None


def extract_first(flat_text: str, patterns: Sequence[PatternSpec]) -> Optional[str]:
    """Trimmed capture of the first pattern that matches, or None."""
    for spec in patterns:
        match = spec.compiled.search(flat_text)
        if match and match.group(1):
            return match.group(1).strip()
    return None


def extract_numeric(flat_text: str, patterns: Sequence[PatternSpec]) -> Optional[Decimal]:
    """
    Numeric variant of extract_first.

    A capture that does not parse, or parses outside the amount range,
    leaves the field absent.
    """
    raw = extract_first(flat_text, patterns)
    if raw is None:
        return None

    value = parse_decimal(raw)
    if not is_valid_amount(value):
        return None
    return value


def extract_auxiliary_fields(flat_text: str) -> AuxiliaryFields:
    """
    Extract tax ID (RFC), invoice/folio number, subtotal and tax (IVA).

    Args:
        flat_text: Whitespace-collapsed OCR text

    Returns:
        AuxiliaryFields with whatever could be found
    """
    return AuxiliaryFields(
        tax_id=extract_first(flat_text, TAX_ID_PATTERNS),
        invoice_number=extract_first(flat_text, INVOICE_NUMBER_PATTERNS),
        subtotal=extract_numeric(flat_text, SUBTOTAL_PATTERNS),
        tax=extract_numeric(flat_text, TAX_PATTERNS),
    )
