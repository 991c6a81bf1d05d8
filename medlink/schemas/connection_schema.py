# medlink/schemas/connection_schema.py
from pydantic import Field
from datetime import datetime
from typing import List, Literal, Optional
from medlink.schemas.base_schema import CamelModel
from medlink.schemas.user_schema import UserSummaryOut
from medlink.models.connection import ConnectionStatus

class ConnectionRequestCreate(CamelModel):
    receiver_id: int

class ConnectionRespond(CamelModel):
    # 只能接受或拒絕
    response: Literal["accepted", "rejected"]

class ConnectionOut(CamelModel):
    id: int
    requester_id: int
    receiver_id: int
    status: ConnectionStatus
    created_at: datetime
    requester: Optional[UserSummaryOut] = None
    receiver: Optional[UserSummaryOut] = None

class ConnectionEnvelope(CamelModel):
    connection: ConnectionOut

# 已連結清單：永遠顯示「對方」
class ConnectedUserOut(CamelModel):
    id: int
    connected_user: UserSummaryOut
    connected_at: datetime

class ConnectionRequestsOut(CamelModel):
    incoming: List[ConnectionOut] = Field(default_factory=list)
    outgoing: List[ConnectionOut] = Field(default_factory=list)
