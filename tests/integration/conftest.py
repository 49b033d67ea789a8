from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers all tables
from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.user import User
from src.depends import (
    get_session,
    get_password_hasher,
    get_text_extraction_service,
    get_image_extraction_service,
)

TEST_PASSWORD = "s3cret-pass"


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite engine shared by every session of one test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def text_extraction_service():
    service = MagicMock()
    service.extract = AsyncMock()
    return service


@pytest.fixture
def image_extraction_service():
    service = MagicMock()
    service.extract = AsyncMock()
    return service


@pytest_asyncio.fixture
async def client(db_session, text_extraction_service, image_extraction_service):
    """HTTP client for the app with database and external services overridden"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_password_hasher] = lambda: BcryptPasswordHasher(rounds=4)
    app.dependency_overrides[get_text_extraction_service] = lambda: text_extraction_service
    app.dependency_overrides[get_image_extraction_service] = lambda: image_extraction_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def api_prefix():
    from config import ApplicationConfig

    return ApplicationConfig.API_PREFIX


@pytest.fixture
def register_user(client, api_prefix):
    """Register an account and return Authorization headers for it"""

    async def _register(email: str, **extra) -> dict:
        payload = {"email": email, "password": TEST_PASSWORD, **extra}
        response = await client.post(f"{api_prefix}/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register


@pytest_asyncio.fixture
async def auth_headers(register_user):
    return await register_user("owner@example.com", company_name="Owner Studio")


@pytest_asyncio.fixture
async def owner(db_session) -> User:
    user = User(email="repo-owner@example.com", password_hash="not-a-real-hash")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def acme(db_session, owner) -> Client:
    acme = Client(user_id=owner.id, client_name="Acme Corp", client_email="billing@acme.test")
    db_session.add(acme)
    await db_session.commit()
    await db_session.refresh(acme)
    return acme


@pytest.fixture
def add_invoice(db_session):
    """Persist an invoice row directly, bypassing the use cases"""

    async def _add(**fields) -> Invoice:
        values = {
            "invoice_number": "INV-202503-0001",
            "invoice_date": date(2025, 3, 14),
            "currency": "USD",
            "status": InvoiceStatus.DRAFT,
        }
        values.update(fields)
        invoice = Invoice(**values)
        db_session.add(invoice)
        await db_session.commit()
        await db_session.refresh(invoice)
        return invoice

    return _add


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """Sessions on a file-backed SQLite database, each with its own connection"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'invoices.db'}",
        connect_args={"timeout": 30},
        future=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()
