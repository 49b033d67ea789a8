from .unit_of_work import UnitOfWork
from .pdf_service import PdfService
from .password_hasher import PasswordHasher
from .token_service import TokenService, TokenError, TokenExpiredError
from .text_extraction_service import TextExtractionService, ExtractionError
from .image_extraction_service import ImageExtractionService, ImageExtraction

__all__ = [
    "UnitOfWork",
    "PdfService",
    "PasswordHasher",
    "TokenService",
    "TokenError",
    "TokenExpiredError",
    "TextExtractionService",
    "ExtractionError",
    "ImageExtractionService",
    "ImageExtraction",
]
