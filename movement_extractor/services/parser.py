"""
Movement parser service for extracting structured data from OCR text.
"""

import logging
import re
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, List

from movement_extractor.models.movement import ExtractedMovement, MovementConfidence, EXPENSE
from movement_extractor.services.amount_extractor import extract_amount
from movement_extractor.services.categories import CategoryMatch, classify_vendor
from movement_extractor.services.date_extractor import extract_date
from movement_extractor.services.fields import (
    AuxiliaryFields,
    VendorMatch,
    extract_auxiliary_fields,
    extract_vendor,
)
from movement_extractor.services.normalizer import NormalizedText, normalize_text
from movement_extractor.utils.candidates import AmountCandidate, DateCandidate

logger = logging.getLogger(__name__)

# Failures an extractor may hit on hostile input; the field is left empty
EXTRACTION_ERRORS = (re.error, ValueError, ArithmeticError)


def overall_confidence(*scores: Optional[int]) -> int:
    """
    Mean of the field confidences that are present, rounded half up.

    Returns 0 when no field was found.
    """
    present: List[int] = [score for score in scores if score is not None]
    if not present:
        return 0
    mean = Decimal(sum(present)) / Decimal(len(present))
    return int(mean.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def build_description(vendor: Optional[str], invoice_number: Optional[str]) -> Optional[str]:
    """'Invoice - {vendor}' with the folio appended when known."""
    if not vendor:
        return None
    description = f"Invoice - {vendor}"
    if invoice_number:
        description += f" ({invoice_number})"
    return description


class MovementParser:
    """Service for parsing receipt text into an ExtractedMovement."""

    def parse(self, text: Optional[str], today: Optional[date] = None) -> ExtractedMovement:
        """
        Parse receipt text and extract all available fields.

        Never raises for string input: missing data shows up as absent
        fields and a lower overall confidence.

        Args:
            text: OCR-extracted text from the receipt
            today: Reference date for date filtering (defaults to today)

        Returns:
            ExtractedMovement with per-field confidences
        """
        today = today or date.today()
        normalized = normalize_text(text)

        amount = self._extract_amount(normalized)
        movement_date = self._extract_date(normalized, today)
        vendor = self._extract_vendor(normalized)
        auxiliary = self._extract_auxiliary(normalized)

        category: Optional[CategoryMatch] = None
        if vendor is not None:
            # Only the category is used; every movement is an expense
            category = classify_vendor(vendor.value)

        confidence = MovementConfidence(
            amount=amount.confidence if amount else None,
            date=movement_date.confidence if movement_date else None,
            vendor=vendor.confidence if vendor else None,
            overall=overall_confidence(
                amount.confidence if amount else None,
                movement_date.confidence if movement_date else None,
                vendor.confidence if vendor else None,
            ),
        )

        movement = ExtractedMovement(
            amount=amount.value if amount else None,
            date=movement_date.value if movement_date else None,
            vendor=vendor.value if vendor else None,
            description=build_description(
                vendor.value if vendor else None,
                auxiliary.invoice_number,
            ),
            category=category.category.value if category else None,
            transaction_type=EXPENSE,
            tax_id=auxiliary.tax_id,
            invoice_number=auxiliary.invoice_number,
            subtotal=auxiliary.subtotal,
            tax=auxiliary.tax,
            confidence=confidence,
        )

        logger.info("Movement extracted", extra={
            "amount": str(movement.amount) if movement.amount is not None else None,
            "date": movement.date.isoformat() if movement.date else None,
            "vendor": movement.vendor,
            "category": movement.category,
            "overall_confidence": confidence.overall,
        })
        return movement

    def _extract_amount(self, normalized: NormalizedText) -> Optional[AmountCandidate]:
        try:
            return extract_amount(normalized.lines)
        except EXTRACTION_ERRORS:
            logger.warning("Error extracting amount", exc_info=True)
            return None

    def _extract_date(self, normalized: NormalizedText, today: date) -> Optional[DateCandidate]:
        try:
            return extract_date(normalized.lines, today)
        except EXTRACTION_ERRORS:
            logger.warning("Error extracting date", exc_info=True)
            return None

    def _extract_vendor(self, normalized: NormalizedText) -> Optional[VendorMatch]:
        try:
            return extract_vendor(normalized.flat)
        except EXTRACTION_ERRORS:
            logger.warning("Error extracting vendor", exc_info=True)
            return None

    def _extract_auxiliary(self, normalized: NormalizedText) -> AuxiliaryFields:
        try:
            return extract_auxiliary_fields(normalized.flat)
        except EXTRACTION_ERRORS:
            logger.warning("Error extracting auxiliary fields", exc_info=True)
            return AuxiliaryFields()


_default_parser = MovementParser()


def extract_movement(text: Optional[str], today: Optional[date] = None) -> ExtractedMovement:
    """
    Extract an ExtractedMovement from OCR text.

    Example:
        >>> movement = extract_movement("Empresa: OXXO\\nTOTAL: $1,234.56")
        >>> movement.amount
        Decimal('1234.56')
    """
    return _default_parser.parse(text, today=today)
