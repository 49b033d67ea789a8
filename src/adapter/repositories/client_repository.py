"""SQLAlchemy Client Repository Implementation

Implements client persistence using SQLAlchemy async session.
"""

from typing import Dict, List, Optional, Sequence, Tuple
from datetime import datetime
from sqlalchemy import or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.client_repository import ClientRepository
from src.domain.client import Client


class SqlAlchemyClientRepository(ClientRepository):
    """
    SQLAlchemy implementation of ClientRepository

    Every query is scoped by owner.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, client: Client) -> Client:
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def get_for_owner(self, owner_id: int, client_id: int) -> Optional[Client]:
        statement = (
            select(Client)
            .where(Client.id == client_id)
            .where(Client.user_id == owner_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_many_for_owner(self, owner_id: int, client_ids: Sequence[int]) -> Dict[int, Client]:
        statement = (
            select(Client)
            .where(Client.user_id == owner_id)
            .where(Client.id.in_(list(client_ids)))
        )
        result = await self.session.execute(statement)
        return {client.id: client for client in result.scalars().all()}

    async def find_by_name(self, owner_id: int, client_name: str) -> Optional[Client]:
        """
        Case-insensitive exact name match

        The oldest client wins when several share a name.
        """
        statement = (
            select(Client)
            .where(Client.user_id == owner_id)
            .where(func.lower(Client.client_name) == client_name.strip().lower())
            .order_by(Client.id.asc())
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def search(
        self,
        owner_id: int,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Client], int]:
        statement = select(Client).where(Client.user_id == owner_id)

        if search:
            statement = statement.where(
                or_(
                    Client.client_name.icontains(search, autoescape=True),
                    Client.client_email.icontains(search, autoescape=True),
                    Client.client_phone.icontains(search, autoescape=True),
                )
            )

        count_statement = select(func.count()).select_from(statement.subquery())
        total = (await self.session.execute(count_statement)).scalar_one()

        statement = (
            statement.order_by(Client.created_at.desc(), Client.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def count_for_owner(self, owner_id: int) -> int:
        statement = select(func.count()).select_from(Client).where(Client.user_id == owner_id)
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def update(self, client: Client) -> Client:
        client.updated_at = datetime.utcnow()
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def delete(self, client: Client) -> None:
        await self.session.delete(client)
        await self.session.flush()
