"""Integration tests for the invoice use cases with a real database

Tests cover:
- Sequential invoice numbering per month
- Totals persisted from line items
- Line item replacement on update
- Status transitions and deletion
- Invoice number collision exhaustion
- Unique consecutive numbers under concurrent creation
"""

import asyncio
import pytest
from datetime import date, datetime
from decimal import Decimal

from sqlmodel import select
from src.adapter.repositories import (
    SqlAlchemyClientRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyLineItemRepository,
    SqlAlchemyPaymentRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import (
    CreateInvoice,
    DeleteInvoice,
    GetInvoice,
    UpdateInvoice,
    UpdateInvoiceStatus,
)
from src.app.use_cases.invoices.dtos import InvoiceDraftDTO, LineItemDraftDTO
from src.domain.line_item import LineItem
from src.domain.user import User


def fixed_clock(moment: datetime):
    return lambda: moment


def make_draft(**overrides) -> InvoiceDraftDTO:
    values = {
        "invoice_date": date(2025, 3, 14),
        "due_date": date(2025, 4, 13),
        "line_items": [
            LineItemDraftDTO(description="Design", quantity=5, unit_price=100, tax_rate=10),
            LineItemDraftDTO(description="Hosting", unit_price=50),
        ],
    }
    values.update(overrides)
    return InvoiceDraftDTO(**values)


def build_create(session, moment=datetime(2025, 3, 14, 12, 0, 0), max_attempts=5):
    return CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyLineItemRepository(session),
        SqlAlchemyClientRepository(session),
        max_attempts=max_attempts,
        clock=fixed_clock(moment),
    )


def build_with_payments(use_case_class, session):
    return use_case_class(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyLineItemRepository(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyClientRepository(session),
    )


@pytest.mark.asyncio
class TestInvoiceLifecycleIntegration:
    """Integration tests with real database"""

    async def test_create_numbers_invoices_sequentially(self, db_session, owner, acme):
        """
        Given an empty invoice table
        When two invoices are created in March 2025 and one in April
        Then they are numbered 0001 and 0002 under 202503 and 0001 under 202504
        """
        # Arrange
        owner_id, acme_id = owner.id, acme.id

        # Act
        first = await build_create(db_session).execute(owner_id, make_draft(client_id=acme_id))
        second = await build_create(db_session).execute(owner_id, make_draft())
        april = await build_create(db_session, moment=datetime(2025, 4, 1, 0, 0, 1)).execute(
            owner_id, make_draft()
        )

        # Assert
        assert first.is_ok() and second.is_ok() and april.is_ok()
        assert first.value.invoice_number == "INV-202503-0001"
        assert second.value.invoice_number == "INV-202503-0002"
        assert april.value.invoice_number == "INV-202504-0001"
        assert first.value.client.client_name == "Acme Corp"

    async def test_create_persists_totals_and_line_items(self, db_session, owner):
        # Arrange
        owner_id = owner.id

        # Act
        result = await build_create(db_session).execute(owner_id, make_draft())

        # Assert
        assert result.is_ok()
        invoice = await SqlAlchemyInvoiceRepository(db_session).get_for_owner(owner_id, result.value.id)
        assert invoice.subtotal == Decimal("550.00")
        assert invoice.total_tax == Decimal("50.00")
        assert invoice.total == Decimal("600.00")

        line_items = await SqlAlchemyLineItemRepository(db_session).get_by_invoice_id(invoice.id)
        assert [item.description for item in line_items] == ["Design", "Hosting"]
        assert line_items[0].tax_amount == Decimal("50")
        assert line_items[1].quantity == Decimal("1")

    async def test_create_rejects_other_users_client(self, db_session, owner, acme):
        result = await build_create(db_session).execute(owner.id + 1, make_draft(client_id=acme.id))

        assert result.is_err()
        assert result.error.code == "CLIENT_NOT_FOUND"

    async def test_create_gives_up_after_repeated_collisions(self, db_session, owner, add_invoice):
        """
        Given the latest March invoice is 0001 but 0002 already exists
        When creating an invoice in March
        Then every attempt collides and INVOICE_NUMBER_CONFLICT is returned
        """
        # Arrange
        owner_id = owner.id
        await add_invoice(
            user_id=owner_id,
            invoice_number="INV-202503-0002",
            created_at=datetime(2025, 3, 1, 8, 0, 0),
        )
        await add_invoice(
            user_id=owner_id,
            invoice_number="INV-202503-0001",
            created_at=datetime(2025, 3, 2, 8, 0, 0),
        )

        # Act
        result = await build_create(db_session, max_attempts=3).execute(owner_id, make_draft())

        # Assert
        assert result.is_err()
        assert result.error.code == "INVOICE_NUMBER_CONFLICT"
        rows = (await db_session.execute(select(LineItem))).scalars().all()
        assert rows == []

    async def test_update_replaces_line_items(self, db_session, owner):
        """
        Given an invoice with two line items
        When it is updated with a single line item
        Then totals are recomputed and the old line items are gone
        """
        # Arrange
        owner_id = owner.id
        created = await build_create(db_session).execute(owner_id, make_draft())
        invoice_id = created.value.id

        # Act
        result = await build_with_payments(UpdateInvoice, db_session).execute(
            owner_id,
            invoice_id,
            make_draft(
                notes="Revised",
                line_items=[LineItemDraftDTO(description="Audit", quantity=2, unit_price=60, tax_rate=5)],
            ),
        )

        # Assert
        assert result.is_ok()
        assert result.value.invoice_number == created.value.invoice_number
        assert result.value.subtotal == Decimal("120.00")
        assert result.value.total_tax == Decimal("6.00")
        assert result.value.total == Decimal("126.00")
        assert result.value.notes == "Revised"

        line_items = await SqlAlchemyLineItemRepository(db_session).get_by_invoice_id(invoice_id)
        assert [item.description for item in line_items] == ["Audit"]

    async def test_resaving_fetched_line_items_keeps_totals(self, db_session, owner):
        """
        Given an invoice with a fractional 8.875% tax rate
        When its line items are read back and saved again unchanged
        Then the stored rate and every total stay the same
        """
        # Arrange
        owner_id = owner.id
        created = await build_create(db_session).execute(
            owner_id,
            make_draft(line_items=[LineItemDraftDTO(description="Goods", quantity=1, unit_price=1000, tax_rate="8.875")]),
        )
        invoice_id = created.value.id
        fetched = await GetInvoice(
            SqlAlchemyInvoiceRepository(db_session),
            SqlAlchemyLineItemRepository(db_session),
            SqlAlchemyPaymentRepository(db_session),
            SqlAlchemyClientRepository(db_session),
        ).execute(owner_id, invoice_id)
        resubmitted = [
            LineItemDraftDTO(
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                tax_rate=item.tax_rate,
                sort_order=item.sort_order,
            )
            for item in fetched.value.line_items
        ]

        # Act
        result = await build_with_payments(UpdateInvoice, db_session).execute(
            owner_id, invoice_id, make_draft(line_items=resubmitted)
        )

        # Assert
        assert created.value.total == Decimal("1088.75")
        assert fetched.value.line_items[0].tax_rate == Decimal("8.875")
        assert result.is_ok()
        assert result.value.total_tax == created.value.total_tax == Decimal("88.75")
        assert result.value.total == created.value.total
        line_item = result.value.line_items[0]
        assert line_item.tax_amount == line_item.line_total * line_item.tax_rate / 100

    async def test_concurrent_creates_get_consecutive_numbers(self, file_session_factory):
        """
        Given several invoices created at once, each on its own session
        When all creations finish
        Then every invoice has a distinct number and together they are consecutive
        """
        # Arrange
        count = 8
        async with file_session_factory() as session:
            user = User(email="concurrent@example.com", password_hash="not-a-real-hash")
            session.add(user)
            await session.commit()
            owner_id = user.id

        async def create_one():
            async with file_session_factory() as session:
                return await build_create(session, max_attempts=count).execute(owner_id, make_draft())

        # Act
        results = await asyncio.gather(*(create_one() for _ in range(count)))

        # Assert
        assert all(result.is_ok() for result in results), [result.error for result in results if result.is_err()]
        numbers = sorted(result.value.invoice_number for result in results)
        assert numbers == [f"INV-202503-{sequence:04d}" for sequence in range(1, count + 1)]

    async def test_status_transitions(self, db_session, owner):
        # Arrange
        owner_id = owner.id
        created = await build_create(db_session).execute(owner_id, make_draft())
        invoice_id = created.value.id
        use_case = build_with_payments(UpdateInvoiceStatus, db_session)

        # Act
        sent = await use_case.execute(owner_id, invoice_id, "sent")
        paid = await use_case.execute(owner_id, invoice_id, "paid")
        reopened = await use_case.execute(owner_id, invoice_id, "draft")

        # Assert
        assert sent.is_ok() and sent.value.status == "sent"
        assert paid.is_ok() and paid.value.status == "paid"
        assert reopened.is_err()
        assert reopened.error.code == "INVALID_STATUS_TRANSITION"

    async def test_delete_removes_invoice_and_line_items(self, db_session, owner):
        # Arrange
        owner_id = owner.id
        created = await build_create(db_session).execute(owner_id, make_draft())
        invoice_id = created.value.id
        use_case = DeleteInvoice(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyInvoiceRepository(db_session),
            SqlAlchemyLineItemRepository(db_session),
            SqlAlchemyPaymentRepository(db_session),
        )

        # Act
        result = await use_case.execute(owner_id, invoice_id)
        again = await use_case.execute(owner_id, invoice_id)

        # Assert
        assert result.is_ok()
        assert await SqlAlchemyInvoiceRepository(db_session).get_for_owner(owner_id, invoice_id) is None
        assert await SqlAlchemyLineItemRepository(db_session).get_by_invoice_id(invoice_id) == []
        assert again.is_err()
        assert again.error.code == "INVOICE_NOT_FOUND"
