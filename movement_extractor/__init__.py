"""
Heuristic extraction of expense movements from receipt OCR text.
"""

from movement_extractor.models.movement import ExtractedMovement, MovementConfidence
from movement_extractor.services.parser import MovementParser, extract_movement

__version__ = "0.1.0"

__all__ = [
    'ExtractedMovement',
    'MovementConfidence',
    'MovementParser',
    'extract_movement',
]
