# medlink/routers/message_router.py

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from medlink.core.database import get_db
from medlink.core.security import get_current_user_id
from medlink.services.message_service import MessageService
from medlink.schemas.message_schema import MessageCreate, SendMessageOut, MessagePageOut

router = APIRouter(prefix="/messages", tags=["Messaging"])


@router.post("", response_model=SendMessageOut, status_code=status.HTTP_201_CREATED, summary="傳送訊息")
async def send_message(
    message_data: MessageCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    只能傳給已接受連結的使用者
    """
    message = await MessageService(db).send_message(user_id, message_data)
    return {"success": True, "message": message}


@router.get("/{other_user_id}", response_model=MessagePageOut, summary="獲取與某人的歷史訊息")
async def get_messages(
    other_user_id: int,
    cursor: Optional[int] = Query(None, description="上一頁回傳的 nextCursor"),
    limit: int = Query(50, ge=1, le=100),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    (API 會自動將寄給自己的未讀訊息標記為已讀)
    回傳順序為由舊到新。
    nextCursor 是下一頁 (較舊訊息) 的最新一筆 id，帶回 cursor 即可接續。
    """
    return await MessageService(db).get_messages(user_id, other_user_id, cursor, limit)
