# medlink/repositories/connection_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import and_, or_
from sqlalchemy.orm import selectinload
from typing import List, Optional

from medlink.models.connection import Connection, ConnectionStatus
from medlink.models.user import User

def _between(user_a: int, user_b: int):
    # 兩人之間 (不分方向)
    return or_(
        and_(Connection.requester_id == user_a, Connection.receiver_id == user_b),
        and_(Connection.requester_id == user_b, Connection.receiver_id == user_a),
    )

class ConnectionRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _party_options(self):
        return (
            selectinload(Connection.requester).selectinload(User.medical_profile),
            selectinload(Connection.receiver).selectinload(User.medical_profile),
        )

    async def get_connection_by_id(self, connection_id: int) -> Optional[Connection]:
        stmt = (
            select(Connection)
            .where(Connection.id == connection_id)
            .options(*self._party_options())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def find_between(self, user_a: int, user_b: int) -> Optional[Connection]:
        """
        查詢兩人之間任何狀態的連結 (pending / accepted / rejected)
        """
        stmt = select(Connection).where(_between(user_a, user_b))
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def find_accepted_between(self, user_a: int, user_b: int) -> Optional[Connection]:
        stmt = select(Connection).where(
            _between(user_a, user_b),
            Connection.status == ConnectionStatus.accepted
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_accepted_for_user(self, user_id: int) -> List[Connection]:
        stmt = (
            select(Connection)
            .where(
                or_(Connection.requester_id == user_id, Connection.receiver_id == user_id),
                Connection.status == ConnectionStatus.accepted
            )
            .options(*self._party_options())
            .order_by(Connection.created_at.desc(), Connection.id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_pending_incoming(self, user_id: int) -> List[Connection]:
        stmt = (
            select(Connection)
            .where(Connection.receiver_id == user_id, Connection.status == ConnectionStatus.pending)
            .options(*self._party_options())
            .order_by(Connection.created_at.desc(), Connection.id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_pending_outgoing(self, user_id: int) -> List[Connection]:
        stmt = (
            select(Connection)
            .where(Connection.requester_id == user_id, Connection.status == ConnectionStatus.pending)
            .options(*self._party_options())
            .order_by(Connection.created_at.desc(), Connection.id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_connection(self, connection: Connection) -> Connection:
        self.db.add(connection)
        await self.db.commit()
        return await self.get_connection_by_id(connection.id)

    async def update_connection(self, connection: Connection) -> Connection:
        """
        更新連結 (主要用於更新 status)
        """
        await self.db.commit()
        return await self.get_connection_by_id(connection.id)
