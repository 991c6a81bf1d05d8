# medlink/schemas/message_schema.py

from pydantic import Field
from typing import List, Optional
from datetime import datetime
from medlink.schemas.base_schema import CamelModel

class MessageCreate(CamelModel):
    receiver_id: int
    content: str = Field(..., min_length=1, description="訊息內容")

class SenderOut(CamelModel):
    id: int
    first_name: str
    last_name: str

class MessageOut(CamelModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool
    created_at: datetime
    # 為了顯示 Sender Name，巢狀 User
    sender: Optional[SenderOut] = None

class SendMessageOut(CamelModel):
    success: bool = True
    message: MessageOut

class MessagePageOut(CamelModel):
    # 由舊到新
    messages: List[MessageOut]
    next_cursor: Optional[int] = None
