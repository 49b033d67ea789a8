"""SQLAlchemy Payment Repository Implementation"""

from typing import Dict, List, Sequence
from sqlalchemy import delete as sa_delete
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment


class SqlAlchemyPaymentRepository(PaymentRepository):
    """SQLAlchemy implementation of PaymentRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: int) -> List[Payment]:
        statement = (
            select(Payment)
            .where(Payment.invoice_id == invoice_id)
            .order_by(Payment.payment_date.desc(), Payment.id.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def delete_by_invoice_id(self, invoice_id: int) -> None:
        statement = sa_delete(Payment).where(Payment.invoice_id == invoice_id)
        await self.session.execute(statement)

    async def count_by_invoice_ids(self, invoice_ids: Sequence[int]) -> Dict[int, int]:
        statement = (
            select(Payment.invoice_id, func.count(Payment.id))
            .where(Payment.invoice_id.in_(list(invoice_ids)))
            .group_by(Payment.invoice_id)
        )
        result = await self.session.execute(statement)
        return {invoice_id: count for invoice_id, count in result.all()}
