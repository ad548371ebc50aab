"""
Exceptions raised around the extraction engine.

The engine itself never raises on text input; these cover the OCR
collaborator that feeds it.

Exception Hierarchy:
    MovementExtractionError (base)
    └── OCRServiceError
"""

from typing import Optional


class MovementExtractionError(Exception):
    """
    Base exception for movement extraction errors.

    Attributes:
        message: Human-readable error message.
        details: Additional context for logs.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class OCRServiceError(MovementExtractionError):
    """Raised when the OCR engine is unavailable or the image is unusable."""

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message, {"reason": reason} if reason else None)


__all__ = [
    'MovementExtractionError',
    'OCRServiceError',
]
