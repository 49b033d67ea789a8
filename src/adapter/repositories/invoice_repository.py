"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Dict, List, Optional, Sequence, Tuple
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import or_, update as sa_update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository, SORTABLE_FIELDS, SORT_ORDERS
from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus

SORT_COLUMNS = {
    "invoice_date": Invoice.invoice_date,
    "due_date": Invoice.due_date,
    "total": Invoice.total,
    "invoice_number": Invoice.invoice_number,
    "created_at": Invoice.created_at,
}


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_for_owner(self, owner_id: int, invoice_id: int) -> Optional[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .where(Invoice.user_id == owner_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve invoice by invoice number

        Args:
            invoice_number: Unique invoice number

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.invoice_number == invoice_number)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_latest_invoice_number(self, prefix: str) -> Optional[str]:
        """
        Invoice number of the most recently created invoice under a prefix

        Ordered by created_at, then id, so the latest insert wins even when
        timestamps tie.
        """
        statement = (
            select(Invoice.invoice_number)
            .where(Invoice.invoice_number.like(f"{prefix}-%"))
            .order_by(Invoice.created_at.desc(), Invoice.id.desc())
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def search(
        self,
        owner_id: int,
        search: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[int] = None,
        sort_by: str = "invoice_date",
        sort_order: str = "desc",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        Search an owner's invoices

        Client name matching uses an outer join, so invoices without a
        client still match on their number.
        """
        if sort_by not in SORTABLE_FIELDS:
            raise ValueError(f"Unsupported sort field: {sort_by}")
        if sort_order not in SORT_ORDERS:
            raise ValueError(f"Unsupported sort order: {sort_order}")

        statement = (
            select(Invoice)
            .outerjoin(Client, Invoice.client_id == Client.id)
            .where(Invoice.user_id == owner_id)
        )

        if search:
            statement = statement.where(
                or_(
                    Invoice.invoice_number.icontains(search, autoescape=True),
                    Client.client_name.icontains(search, autoescape=True),
                )
            )

        if status:
            statement = statement.where(Invoice.status == status)

        if client_id is not None:
            statement = statement.where(Invoice.client_id == client_id)

        count_statement = select(func.count()).select_from(statement.subquery())
        total = (await self.session.execute(count_statement)).scalar_one()

        column = SORT_COLUMNS[sort_by]
        if sort_order == "asc":
            statement = statement.order_by(column.asc(), Invoice.id.asc())
        else:
            statement = statement.order_by(column.desc(), Invoice.id.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def get_recent_for_client(
        self, owner_id: int, client_id: int, limit: int = 10
    ) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.user_id == owner_id)
            .where(Invoice.client_id == client_id)
            .order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_client_ids(
        self, owner_id: int, client_ids: Sequence[int]
    ) -> Dict[int, int]:
        statement = (
            select(Invoice.client_id, func.count(Invoice.id))
            .where(Invoice.user_id == owner_id)
            .where(Invoice.client_id.in_(list(client_ids)))
            .group_by(Invoice.client_id)
        )
        result = await self.session.execute(statement)
        return {client_id: count for client_id, count in result.all()}

    async def detach_client(self, owner_id: int, client_id: int) -> None:
        statement = (
            sa_update(Invoice)
            .where(Invoice.user_id == owner_id)
            .where(Invoice.client_id == client_id)
            .values(client_id=None, updated_at=datetime.utcnow())
        )
        await self.session.execute(statement)

    async def sum_total(self, owner_id: int, status: Optional[InvoiceStatus] = None) -> Decimal:
        statement = select(func.sum(Invoice.total)).where(Invoice.user_id == owner_id)
        if status:
            statement = statement.where(Invoice.status == status)
        result = await self.session.execute(statement)
        value = result.scalar_one_or_none()
        return Decimal(str(value)) if value is not None else Decimal("0")

    async def average_total(self, owner_id: int) -> Decimal:
        statement = select(func.avg(Invoice.total)).where(Invoice.user_id == owner_id)
        result = await self.session.execute(statement)
        value = result.scalar_one_or_none()
        return Decimal(str(value)) if value is not None else Decimal("0")

    async def count_by_status(self, owner_id: int) -> Dict[InvoiceStatus, int]:
        statement = (
            select(Invoice.status, func.count(Invoice.id))
            .where(Invoice.user_id == owner_id)
            .group_by(Invoice.status)
        )
        result = await self.session.execute(statement)
        return {InvoiceStatus(status): count for status, count in result.all()}

    async def get_overdue_candidates(self, today: date) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.status == InvoiceStatus.SENT)
            .where(Invoice.due_date.is_not(None))
            .where(Invoice.due_date < today)
            .order_by(Invoice.due_date.asc(), Invoice.id.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
