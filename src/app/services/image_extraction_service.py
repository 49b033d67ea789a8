"""Image Extraction Service Interface

Runs optical character recognition on a scanned invoice.
"""

from abc import ABC, abstractmethod
from typing import Optional
from pydantic import BaseModel, Field


class ImageExtraction(BaseModel):
    """Recognized text of an image"""

    text: str = Field(..., description="Recognized text")
    confidence: Optional[float] = Field(
        default=None,
        description="Mean recognition confidence between 0 and 1"
    )


class ImageExtractionService(ABC):
    """Service interface for image text recognition"""

    @abstractmethod
    async def extract(self, image_bytes: bytes) -> ImageExtraction:
        """
        Recognize the text of an invoice image

        Args:
            image_bytes: Encoded image (PNG, JPEG, TIFF, ...)

        Returns:
            ImageExtraction with text and confidence

        Raises:
            ExtractionError: If the image cannot be read or recognized
        """
        pass
