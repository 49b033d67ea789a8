"""Integration tests for SqlAlchemyInvoiceRepository against SQLite"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from src.adapter.repositories import SqlAlchemyInvoiceRepository
from src.domain.invoice import InvoiceStatus


@pytest.mark.asyncio
class TestInvoiceRepositoryIntegration:

    async def test_latest_invoice_number_uses_creation_order(self, db_session, owner, add_invoice):
        """
        Given two invoices under the same prefix
        When the most recently created one has the lower number
        Then it is still the one returned as latest
        """
        # Arrange
        await add_invoice(
            user_id=owner.id,
            invoice_number="INV-202503-0007",
            created_at=datetime(2025, 3, 1, 9, 0, 0),
        )
        await add_invoice(
            user_id=owner.id,
            invoice_number="INV-202503-0002",
            created_at=datetime(2025, 3, 2, 9, 0, 0),
        )
        await add_invoice(
            user_id=owner.id,
            invoice_number="INV-202504-0001",
            created_at=datetime(2025, 4, 1, 9, 0, 0),
        )
        repo = SqlAlchemyInvoiceRepository(db_session)

        # Act / Assert
        assert await repo.get_latest_invoice_number("INV-202503") == "INV-202503-0002"
        assert await repo.get_latest_invoice_number("INV-202505") is None

    async def test_invoice_number_is_unique(self, db_session, owner, add_invoice):
        await add_invoice(user_id=owner.id, invoice_number="INV-202503-0001")

        with pytest.raises(IntegrityError):
            await add_invoice(user_id=owner.id, invoice_number="INV-202503-0001")

        await db_session.rollback()

    async def test_search_matches_number_or_client_name(self, db_session, owner, acme, add_invoice):
        """
        Given one invoice billed to Acme and one without a client
        When searching by client name and by number
        Then each search finds the matching invoice only
        """
        # Arrange
        owner_id, acme_id = owner.id, acme.id
        await add_invoice(user_id=owner_id, client_id=acme_id, invoice_number="INV-202503-0001")
        await add_invoice(user_id=owner_id, invoice_number="INV-202503-0002")
        repo = SqlAlchemyInvoiceRepository(db_session)

        # Act
        by_client, client_total = await repo.search(owner_id, search="acme")
        by_number, number_total = await repo.search(owner_id, search="0002")

        # Assert
        assert client_total == 1
        assert by_client[0].client_id == acme_id
        assert number_total == 1
        assert by_number[0].invoice_number == "INV-202503-0002"

    async def test_search_filters_sorts_and_paginates(self, db_session, owner, add_invoice):
        # Arrange
        owner_id = owner.id
        for index, total in enumerate(["300.00", "100.00", "200.00"], start=1):
            await add_invoice(
                user_id=owner_id,
                invoice_number=f"INV-202503-000{index}",
                status=InvoiceStatus.SENT,
                total=Decimal(total),
            )
        await add_invoice(user_id=owner_id, invoice_number="INV-202503-0004", status=InvoiceStatus.PAID)
        repo = SqlAlchemyInvoiceRepository(db_session)

        # Act
        first_page, total = await repo.search(
            owner_id, status=InvoiceStatus.SENT, sort_by="total", sort_order="asc", limit=2, offset=0
        )
        second_page, _ = await repo.search(
            owner_id, status=InvoiceStatus.SENT, sort_by="total", sort_order="asc", limit=2, offset=2
        )

        # Assert
        assert total == 3
        assert [invoice.total for invoice in first_page] == [Decimal("100.00"), Decimal("200.00")]
        assert [invoice.total for invoice in second_page] == [Decimal("300.00")]

    async def test_search_rejects_unknown_sort_field(self, db_session, owner):
        repo = SqlAlchemyInvoiceRepository(db_session)

        with pytest.raises(ValueError):
            await repo.search(owner.id, sort_by="password_hash")

    async def test_search_is_scoped_to_owner(self, db_session, owner, add_invoice):
        await add_invoice(user_id=owner.id, invoice_number="INV-202503-0001")
        await add_invoice(user_id=owner.id + 1, invoice_number="INV-202503-0002")
        repo = SqlAlchemyInvoiceRepository(db_session)

        invoices, total = await repo.search(owner.id)

        assert total == 1
        assert invoices[0].invoice_number == "INV-202503-0001"

    async def test_detach_client_keeps_invoices(self, db_session, owner, acme, add_invoice):
        """
        Given an invoice billed to Acme
        When Acme's invoices are detached
        Then the invoice remains with no client
        """
        # Arrange
        owner_id, acme_id = owner.id, acme.id
        invoice = await add_invoice(user_id=owner_id, client_id=acme_id)
        repo = SqlAlchemyInvoiceRepository(db_session)

        # Act
        await repo.detach_client(owner_id, acme_id)
        await db_session.commit()

        # Assert
        reloaded = await repo.get_for_owner(owner_id, invoice.id)
        assert reloaded is not None
        assert reloaded.client_id is None
        assert await repo.count_by_client_ids(owner_id, [acme_id]) == {}

    async def test_aggregates(self, db_session, owner, add_invoice):
        # Arrange
        owner_id = owner.id
        await add_invoice(
            user_id=owner_id, invoice_number="INV-202503-0001",
            status=InvoiceStatus.PAID, total=Decimal("550.00"),
        )
        await add_invoice(
            user_id=owner_id, invoice_number="INV-202503-0002",
            status=InvoiceStatus.PAID, total=Decimal("130.00"),
        )
        await add_invoice(
            user_id=owner_id, invoice_number="INV-202503-0003",
            status=InvoiceStatus.DRAFT, total=Decimal("20.00"),
        )
        repo = SqlAlchemyInvoiceRepository(db_session)

        # Act
        revenue = await repo.sum_total(owner_id, status=InvoiceStatus.PAID)
        average = await repo.average_total(owner_id)
        counts = await repo.count_by_status(owner_id)

        # Assert
        assert revenue == Decimal("680")
        assert average.quantize(Decimal("0.01")) == Decimal("233.33")
        assert counts == {InvoiceStatus.PAID: 2, InvoiceStatus.DRAFT: 1}

    async def test_aggregates_without_invoices(self, db_session, owner):
        repo = SqlAlchemyInvoiceRepository(db_session)

        assert await repo.sum_total(owner.id) == Decimal("0")
        assert await repo.average_total(owner.id) == Decimal("0")
        assert await repo.count_by_status(owner.id) == {}

    async def test_overdue_candidates(self, db_session, owner, add_invoice):
        """
        Given invoices with various statuses and due dates
        When looking for overdue candidates on 2025-04-15
        Then only sent invoices due strictly before that date are returned
        """
        # Arrange
        owner_id = owner.id
        await add_invoice(
            user_id=owner_id, invoice_number="INV-202503-0001",
            status=InvoiceStatus.SENT, due_date=date(2025, 4, 13),
        )
        await add_invoice(
            user_id=owner_id, invoice_number="INV-202503-0002",
            status=InvoiceStatus.SENT, due_date=date(2025, 4, 15),
        )
        await add_invoice(
            user_id=owner_id, invoice_number="INV-202503-0003",
            status=InvoiceStatus.DRAFT, due_date=date(2025, 4, 1),
        )
        await add_invoice(
            user_id=owner_id, invoice_number="INV-202503-0004",
            status=InvoiceStatus.SENT,
        )
        repo = SqlAlchemyInvoiceRepository(db_session)

        # Act
        candidates = await repo.get_overdue_candidates(date(2025, 4, 15))

        # Assert
        assert [invoice.invoice_number for invoice in candidates] == ["INV-202503-0001"]
