# models/connection.py
import enum
from sqlalchemy import Column, Integer, Enum, ForeignKey, TIMESTAMP, UniqueConstraint, func
from sqlalchemy.orm import relationship
from medlink.core.database import Base

class ConnectionStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"

# pending 只能變成 accepted 或 rejected，之後就不能再變
CONNECTION_TRANSITIONS = {
    ConnectionStatus.pending: {ConnectionStatus.accepted, ConnectionStatus.rejected},
    ConnectionStatus.accepted: set(),
    ConnectionStatus.rejected: set(),
}

def can_transition_connection(current: ConnectionStatus, new: ConnectionStatus) -> bool:
    return new in CONNECTION_TRANSITIONS[ConnectionStatus(current)]

class Connection(Base):
    """
    使用者之間的連結邀請 (有方向)，被接受後視為雙向連結。
    反方向的重複列由 Service 層查詢檢查；同方向另有唯一索引。
    被拒絕的配對不會刪除，因此無法再次送出邀請。
    """
    __tablename__ = "connections"
    __table_args__ = (UniqueConstraint("requester_id", "receiver_id", name="uq_connection_pair"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        Enum(ConnectionStatus, values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=ConnectionStatus.pending
    )
    created_at = Column(TIMESTAMP, server_default=func.now())

    # 必須明確指定 foreign_keys (兩個 FK 都指向 users)
    requester = relationship("User", foreign_keys="[Connection.requester_id]")
    receiver = relationship("User", foreign_keys="[Connection.receiver_id]")
