from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.token_service import JwtTokenService
from src.adapter.services.text_extraction_service import OpenAITextExtractionService
from src.adapter.services.image_extraction_service import TesseractImageExtractionService
from src.app.services import (
    PdfService,
    PasswordHasher,
    TokenService,
    TextExtractionService,
    ImageExtractionService,
)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_token_service() -> TokenService:
    return JwtTokenService(
        secret=ApplicationConfig.JWT_SECRET,
        algorithm=ApplicationConfig.JWT_ALGORITHM,
        expires_minutes=ApplicationConfig.JWT_EXPIRES_MINUTES,
    )


def get_pdf_service() -> PdfService:
    return ReportLabPdfService(default_company_name=ApplicationConfig.PDF_DEFAULT_COMPANY_NAME)


def get_text_extraction_service() -> TextExtractionService:
    return OpenAITextExtractionService(
        api_key=ApplicationConfig.LLM_API_KEY,
        model=ApplicationConfig.LLM_MODEL,
        base_url=ApplicationConfig.LLM_BASE_URL,
        timeout=ApplicationConfig.LLM_TIMEOUT_SECONDS,
    )


def get_image_extraction_service() -> ImageExtractionService:
    return TesseractImageExtractionService(language=ApplicationConfig.OCR_LANGUAGE)
