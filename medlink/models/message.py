# medlink/models/message.py
from sqlalchemy import Column, Integer, Text, ForeignKey, TIMESTAMP, Boolean, func
from sqlalchemy.orm import relationship
from medlink.core.database import Base

class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    # --- 必要：明確指定 foreign_keys ---
    sender = relationship("User", foreign_keys="[Message.sender_id]")
    receiver = relationship("User", foreign_keys="[Message.receiver_id]")
