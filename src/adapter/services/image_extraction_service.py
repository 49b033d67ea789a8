"""Tesseract Image Extraction Service Implementation

Runs pytesseract in a worker thread so OCR does not block the event loop.
"""

import asyncio
import io
import logging
from typing import Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

from src.app.services.image_extraction_service import ImageExtractionService, ImageExtraction
from src.app.services.text_extraction_service import ExtractionError

logger = logging.getLogger(__name__)

TESSERACT_CONFIG = "--oem 3 --psm 6"


class TesseractImageExtractionService(ImageExtractionService):
    """pytesseract + Pillow implementation of ImageExtractionService"""

    def __init__(self, language: str = "eng", config: str = TESSERACT_CONFIG):
        self.language = language
        self.config = config

    def _mean_confidence(self, image: Image.Image) -> Optional[float]:
        """Mean word confidence (0..1) over recognized words"""
        data = pytesseract.image_to_data(
            image,
            lang=self.language,
            config=self.config,
            output_type=pytesseract.Output.DICT,
        )
        scores = []
        for word, conf in zip(data.get("text", []), data.get("conf", [])):
            try:
                value = float(conf)
            except (TypeError, ValueError):
                continue
            if word and word.strip() and value >= 0:
                scores.append(value)
        if not scores:
            return None
        return round(sum(scores) / len(scores) / 100, 4)

    def _recognize(self, image_bytes: bytes) -> ImageExtraction:
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ExtractionError(f"Cannot read image: {e}") from e

        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")

        try:
            text = pytesseract.image_to_string(image, lang=self.language, config=self.config)
            confidence = self._mean_confidence(image)
        except pytesseract.TesseractError as e:
            raise ExtractionError(f"OCR failed: {e}") from e
        except pytesseract.TesseractNotFoundError as e:
            raise ExtractionError("Tesseract is not installed") from e

        return ImageExtraction(text=text, confidence=confidence)

    async def extract(self, image_bytes: bytes) -> ImageExtraction:
        extraction = await asyncio.to_thread(self._recognize, image_bytes)
        logger.info(
            f"OCR recognized {len(extraction.text)} characters "
            f"(confidence={extraction.confidence})"
        )
        return extraction
