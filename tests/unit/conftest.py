import pytest
from datetime import datetime, date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus, InvoiceSource


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def sample_client():
    return Client(
        id=3,
        user_id=1,
        client_name="Acme Corp",
        client_email="billing@acme.test",
        created_at=datetime(2025, 3, 1),
        updated_at=datetime(2025, 3, 1),
    )


@pytest.fixture
def make_invoice():
    """Factory for persisted-looking Invoice entities"""

    def _make(**overrides):
        values = dict(
            id=10,
            user_id=1,
            client_id=None,
            invoice_number="INV-202503-0001",
            invoice_date=date(2025, 3, 14),
            due_date=date(2025, 4, 13),
            currency="USD",
            subtotal=Decimal("550.00"),
            total_tax=Decimal("50.00"),
            total=Decimal("600.00"),
            status=InvoiceStatus.DRAFT,
            source=InvoiceSource.MANUAL,
            created_at=datetime(2025, 3, 14, 9, 0, 0),
            updated_at=datetime(2025, 3, 14, 9, 0, 0),
        )
        values.update(overrides)
        return Invoice(**values)

    return _make
