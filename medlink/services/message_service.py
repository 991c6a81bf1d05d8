# medlink/services/message_service.py

import logging
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.models.message import Message
from medlink.repositories.connection_repo import ConnectionRepository
from medlink.repositories.message_repo import MessageRepository
from medlink.schemas.message_schema import MessageCreate, MessageOut, MessagePageOut
from medlink.utils.pagination import split_page

logger = logging.getLogger(__name__)

class MessageService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.message_repo = MessageRepository(db)
        self.connection_repo = ConnectionRepository(db)

    async def _ensure_connected(self, user_id: int, other_user_id: int, detail: str) -> None:
        connection = await self.connection_repo.find_accepted_between(user_id, other_user_id)
        if not connection:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

    async def send_message(self, sender_id: int, message_data: MessageCreate) -> Message:
        """
        只能傳訊息給已連結的使用者
        """
        if sender_id == message_data.receiver_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="不能傳訊息給自己")

        await self._ensure_connected(sender_id, message_data.receiver_id, "只能傳訊息給已連結的使用者")

        message = await self.message_repo.save_message(
            Message(
                sender_id=sender_id,
                receiver_id=message_data.receiver_id,
                content=message_data.content,
            )
        )
        logger.info(f"Message {message.id}: {sender_id} -> {message_data.receiver_id}")
        return message

    async def get_messages(
        self, user_id: int, other_user_id: int, cursor: Optional[int], limit: int
    ) -> MessagePageOut:
        """
        獲取歷史訊息，並將寄給自己的訊息標記為已讀。
        回傳順序為由舊到新。
        """
        await self._ensure_connected(user_id, other_user_id, "只能查看已連結使用者的訊息")

        rows = await self.message_repo.get_conversation_page(user_id, other_user_id, cursor, limit)

        # 標記已讀 (包含多取的那一筆，它也已經被讀取)
        try:
            await self.message_repo.mark_messages_as_read(rows, user_id)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"標記已讀失敗: {e}", exc_info=True)
            raise

        messages, next_cursor = split_page(rows, limit)
        messages.reverse()
        return MessagePageOut(
            messages=[MessageOut.model_validate(m) for m in messages],
            next_cursor=next_cursor,
        )
