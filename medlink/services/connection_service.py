# medlink/services/connection_service.py

import logging
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from medlink.models.connection import Connection, ConnectionStatus, can_transition_connection
from medlink.repositories.connection_repo import ConnectionRepository
from medlink.repositories.user_repo import UserRepository
from medlink.schemas.connection_schema import ConnectedUserOut, ConnectionOut, ConnectionRequestsOut
from medlink.schemas.user_schema import UserSummaryOut

logger = logging.getLogger(__name__)

class ConnectionService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.connection_repo = ConnectionRepository(db)
        self.user_repo = UserRepository(db)

    async def send_request(self, requester_id: int, receiver_id: int) -> Connection:
        """
        送出連結邀請。
        兩人之間只要已有任何紀錄 (包含被拒絕的)，就不能再送。
        """
        if requester_id == receiver_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="不能對自己送出連結邀請")

        receiver = await self.user_repo.get_user_by_id(receiver_id)
        if not receiver:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="使用者不存在")

        existing = await self.connection_repo.find_between(requester_id, receiver_id)
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="連結邀請已存在或雙方已經連結"
            )

        try:
            connection = await self.connection_repo.create_connection(
                Connection(
                    requester_id=requester_id,
                    receiver_id=receiver_id,
                    status=ConnectionStatus.pending
                )
            )
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="連結邀請已存在或雙方已經連結"
            )

        logger.info(f"Connection request {connection.id}: {requester_id} -> {receiver_id}")
        return connection

    async def respond_to_request(self, user_id: int, connection_id: int, response: str) -> Connection:
        """
        (收件人) 接受或拒絕連結邀請，只能回覆一次
        """
        connection = await self.connection_repo.get_connection_by_id(connection_id)
        if not connection:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="連結邀請不存在")

        if connection.receiver_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="只能回覆寄給你的連結邀請")

        new_status = ConnectionStatus(response)
        if not can_transition_connection(connection.status, new_status):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="此連結邀請已經回覆過")

        connection.status = new_status
        updated = await self.connection_repo.update_connection(connection)
        logger.info(f"Connection {connection_id} {new_status.value} by User {user_id}")
        return updated

    async def get_connections(self, user_id: int) -> List[ConnectedUserOut]:
        """
        已連結清單：不論誰發出邀請，一律顯示「對方」
        """
        connections = await self.connection_repo.list_accepted_for_user(user_id)
        result = []
        for connection in connections:
            other = connection.receiver if connection.requester_id == user_id else connection.requester
            result.append(ConnectedUserOut(
                id=connection.id,
                connected_user=UserSummaryOut.model_validate(other),
                connected_at=connection.created_at,
            ))
        return result

    async def get_requests(self, user_id: int) -> ConnectionRequestsOut:
        incoming = await self.connection_repo.list_pending_incoming(user_id)
        outgoing = await self.connection_repo.list_pending_outgoing(user_id)
        return ConnectionRequestsOut(
            incoming=[ConnectionOut.model_validate(c) for c in incoming],
            outgoing=[ConnectionOut.model_validate(c) for c in outgoing],
        )
