"""
Receipt scanner combining OCR and the heuristic parser.

Consumers depend on MovementExtractor so the OCR + heuristic path can be
swapped for another image-to-movement implementation (for example a hosted
vision-language model) without changes on their side.
"""

import logging
import time
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from movement_extractor.models.movement import ExtractedMovement
from movement_extractor.services.ocr import OCRService
from movement_extractor.services.parser import MovementParser

logger = logging.getLogger(__name__)


class MovementExtractor(ABC):
    """Anything that turns a receipt image into an ExtractedMovement."""

    @abstractmethod
    def extract_from_image(self, image_data: bytes, quality: Optional[str] = None) -> ExtractedMovement:
        """Extract a movement from raw image bytes."""


class ScanResult(BaseModel):
    """OCR text, OCR metadata and the movement extracted from it."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    ocr_text: str
    ocr_confidence: int
    processing_time_ms: int
    movement: ExtractedMovement

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


class ReceiptScanner(MovementExtractor):
    """Service for scanning receipt images into movements."""

    def __init__(
        self,
        ocr_service: Optional[OCRService] = None,
        parser: Optional[MovementParser] = None,
    ):
        self.ocr_service = ocr_service or OCRService()
        self.parser = parser or MovementParser()

    def scan(
        self,
        image_data: bytes,
        quality: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ScanResult:
        """
        Recognize a receipt image and extract its movement.

        Args:
            image_data: Raw image bytes
            quality: OCR preprocessing hint ('low', 'medium', 'high')
            today: Reference date for date filtering

        Returns:
            ScanResult

        Raises:
            OCRServiceError: If OCR fails; text extraction itself never raises
        """
        start = time.perf_counter()

        ocr_result = self.ocr_service.recognize(image_data, quality)
        movement = self.parser.parse(ocr_result.text, today=today)

        processing_time_ms = int((time.perf_counter() - start) * 1000)

        if movement.amount is None:
            logger.warning("No amount found in scanned receipt", extra={
                "ocr_confidence": ocr_result.confidence,
                "characters": len(ocr_result.text),
            })

        return ScanResult(
            ocr_text=ocr_result.text,
            ocr_confidence=ocr_result.confidence,
            processing_time_ms=processing_time_ms,
            movement=movement,
        )

    def extract_from_image(self, image_data: bytes, quality: Optional[str] = None) -> ExtractedMovement:
        return self.scan(image_data, quality).movement

    def close(self) -> None:
        self.ocr_service.terminate()

    def __enter__(self) -> 'ReceiptScanner':
        self.ocr_service.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
