"""
OCR service for extracting text from receipt images.

The service is an explicit resource: the owner calls initialize() (or
enters it as a context manager) and terminate() when done.
"""

import base64
import binascii
import io
import logging
import re
import time
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import pytesseract
from PIL import Image, ImageEnhance, ImageFilter, ImageOps, UnidentifiedImageError

from movement_extractor.config import settings
from movement_extractor.exceptions import OCRServiceError

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r'^data:image/[a-z]+;base64,', re.IGNORECASE)


@dataclass(frozen=True)
class QualityProfile:
    """Preprocessing settings for one image quality hint."""
    max_height: int
    contrast: float
    sharpen: bool
    threshold: Optional[int] = None  # binarization cutoff, None keeps greys


QUALITY_PROFILES: Dict[str, QualityProfile] = {
    'low': QualityProfile(max_height=1000, contrast=1.1, sharpen=False),
    'medium': QualityProfile(max_height=1600, contrast=1.15, sharpen=True, threshold=130),
    'high': QualityProfile(max_height=2400, contrast=1.2, sharpen=True, threshold=140),
}


@dataclass(frozen=True)
class OCRResult:
    text: str
    confidence: int  # mean word confidence reported by Tesseract, 0-100
    processing_time_ms: int


def decode_image_payload(payload: str) -> bytes:
    """
    Decode a base64 image, with or without a data URL prefix.

    Raises:
        OCRServiceError: If the payload is not valid base64
    """
    if not payload:
        raise OCRServiceError("Image payload is empty")

    encoded = _DATA_URL_PREFIX.sub('', payload.strip())
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise OCRServiceError("Image payload is not valid base64", reason=str(e)) from e


def load_image(image_data: bytes) -> Image.Image:
    """
    Open raw image bytes.

    Raises:
        OCRServiceError: If the bytes are not a readable image
    """
    try:
        image = Image.open(io.BytesIO(image_data))
        image.load()
        return image
    except (UnidentifiedImageError, OSError) as e:
        raise OCRServiceError("Could not read image", reason=str(e)) from e


def preprocess_image(image: Image.Image, quality: Optional[str] = None) -> Image.Image:
    """
    Preprocess image to improve OCR accuracy.

    Args:
        image: PIL Image object
        quality: 'low', 'medium' or 'high' (unknown values use medium)

    Returns:
        Preprocessed greyscale image
    """
    profile = QUALITY_PROFILES.get(quality or settings.OCR_DEFAULT_QUALITY, QUALITY_PROFILES['medium'])

    # Convert to RGB if needed, then to grayscale
    if image.mode != 'RGB':
        image = image.convert('RGB')
    image = image.convert('L')

    # Shrink oversized photos; never enlarge
    if image.height > profile.max_height:
        width = round(image.width * profile.max_height / image.height)
        image = image.resize((width, profile.max_height), Image.Resampling.LANCZOS)

    if profile.sharpen:
        image = image.filter(ImageFilter.SHARPEN)

    image = ImageOps.autocontrast(image)
    image = ImageEnhance.Contrast(image).enhance(profile.contrast)

    if profile.threshold is not None:
        cutoff = profile.threshold
        image = image.point(lambda p: 255 if p > cutoff else 0)

    # Reduce speckle noise
    return image.filter(ImageFilter.MedianFilter(3))


def mean_confidence(confidences: Iterable) -> int:
    """Average Tesseract word confidence, ignoring non-word boxes (-1)."""
    values = []
    for conf in confidences:
        try:
            value = float(conf)
        except (TypeError, ValueError):
            continue
        if value >= 0:
            values.append(value)

    if not values:
        return 0
    return round(sum(values) / len(values))


class OCRService:
    """Service for extracting text from receipt images with Tesseract."""

    def __init__(
        self,
        tesseract_cmd: Optional[str] = None,
        language: Optional[str] = None,
        config: Optional[str] = None,
    ):
        self.tesseract_cmd = tesseract_cmd or settings.TESSERACT_CMD
        self.language = language or settings.OCR_LANGUAGE
        self.config = config or settings.OCR_CONFIG
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """
        Point pytesseract at the binary and check that it runs.

        Raises:
            OCRServiceError: If Tesseract is missing
        """
        if self._initialized:
            return

        pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
        try:
            version = pytesseract.get_tesseract_version()
        except (pytesseract.TesseractNotFoundError, OSError) as e:
            raise OCRServiceError("Failed to initialize OCR service", reason=str(e)) from e

        self._initialized = True
        logger.info("OCR service initialized", extra={
            "tesseract_version": str(version),
            "language": self.language,
        })

    def terminate(self) -> None:
        if self._initialized:
            self._initialized = False
            logger.info("OCR service terminated")

    def __enter__(self) -> 'OCRService':
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.terminate()

    def recognize(
        self,
        image_data: bytes,
        quality: Optional[str] = None,
        preprocess: bool = True,
    ) -> OCRResult:
        """
        Extract text from an image.

        Args:
            image_data: Raw image bytes (JPEG, PNG, etc.)
            quality: Preprocessing hint ('low', 'medium', 'high')
            preprocess: Set to False to send the image to Tesseract as is

        Returns:
            OCRResult with the recognized text

        Raises:
            OCRServiceError: If the image is unreadable or Tesseract fails
        """
        if not self._initialized:
            self.initialize()

        start = time.perf_counter()

        image = load_image(image_data)
        if preprocess:
            image = self._preprocess(image, quality)

        try:
            text = pytesseract.image_to_string(image, lang=self.language, config=self.config)
            data = pytesseract.image_to_data(
                image,
                lang=self.language,
                config=self.config,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, RuntimeError) as e:
            raise OCRServiceError("Failed to process image with OCR", reason=str(e)) from e

        processing_time_ms = int((time.perf_counter() - start) * 1000)
        confidence = mean_confidence(data.get('conf', []))

        logger.info("OCR completed", extra={
            "characters": len(text),
            "ocr_confidence": confidence,
            "processing_time_ms": processing_time_ms,
        })
        return OCRResult(text=text.strip(), confidence=confidence, processing_time_ms=processing_time_ms)

    def recognize_payload(
        self,
        payload: str,
        quality: Optional[str] = None,
        preprocess: bool = True,
    ) -> OCRResult:
        """Recognize a base64 / data URL encoded image."""
        return self.recognize(decode_image_payload(payload), quality, preprocess)

    def _preprocess(self, image: Image.Image, quality: Optional[str]) -> Image.Image:
        try:
            return preprocess_image(image, quality)
        except (OSError, ValueError):
            logger.warning("Image preprocessing failed, using original image", extra={
                "quality": quality,
                "image_mode": image.mode,
            }, exc_info=True)
            return image
