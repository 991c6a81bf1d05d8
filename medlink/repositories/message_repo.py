# medlink/repositories/message_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_
from sqlalchemy.orm import selectinload
from typing import Optional, List

from medlink.models.message import Message
from medlink.utils.pagination import apply_keyset

class MessageRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_conversation_page(
        self, user_id: int, other_user_id: int, cursor: Optional[int], limit: int
    ) -> List[Message]:
        """
        取得兩人之間的訊息 (由新到舊)，多取一筆用於判斷下一頁
        """
        stmt = select(Message).where(
            or_(
                and_(Message.sender_id == user_id, Message.receiver_id == other_user_id),
                and_(Message.sender_id == other_user_id, Message.receiver_id == user_id),
            )
        )
        stmt = apply_keyset(stmt, Message, cursor, limit).options(selectinload(Message.sender))
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def save_message(self, message: Message) -> Message:
        self.db.add(message)
        await self.db.commit()
        stmt = (
            select(Message)
            .where(Message.id == message.id)
            .options(selectinload(Message.sender))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def mark_messages_as_read(self, messages: List[Message], user_id: int) -> int:
        """
        將清單中「收件人是 user_id 且未讀」的訊息標記為已讀，回傳標記數量
        """
        marked = 0
        for msg in messages:
            if msg.receiver_id == user_id and not msg.is_read:
                msg.is_read = True
                marked += 1
        if marked:
            await self.db.commit()
        return marked
