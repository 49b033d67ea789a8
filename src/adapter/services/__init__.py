from .unit_of_work import SqlAlchemyUnitOfWork
from .pdf_service import ReportLabPdfService
from .password_hasher import BcryptPasswordHasher
from .token_service import JwtTokenService
from .text_extraction_service import OpenAITextExtractionService, strip_code_fences
from .image_extraction_service import TesseractImageExtractionService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "ReportLabPdfService",
    "BcryptPasswordHasher",
    "JwtTokenService",
    "OpenAITextExtractionService",
    "strip_code_fences",
    "TesseractImageExtractionService",
]
