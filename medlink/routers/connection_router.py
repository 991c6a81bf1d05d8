# medlink/routers/connection_router.py

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.core.database import get_db
from medlink.core.security import get_current_user_id
from medlink.services.connection_service import ConnectionService
from medlink.schemas.connection_schema import (
    ConnectionRequestCreate, ConnectionRespond, ConnectionEnvelope,
    ConnectedUserOut, ConnectionRequestsOut
)

router = APIRouter(prefix="/connections", tags=["Connections"])


@router.get("", response_model=List[ConnectedUserOut], summary="已連結的使用者")
async def list_connections(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await ConnectionService(db).get_connections(user_id)


@router.get("/requests", response_model=ConnectionRequestsOut, summary="待回覆的連結邀請")
async def list_connection_requests(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    incoming: 別人寄給我的；outgoing: 我寄出去的 (都只包含 pending)
    """
    return await ConnectionService(db).get_requests(user_id)


@router.post(
    "/requests",
    response_model=ConnectionEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="送出連結邀請"
)
async def send_connection_request(
    request_data: ConnectionRequestCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    connection = await ConnectionService(db).send_request(user_id, request_data.receiver_id)
    return {"connection": connection}


@router.post(
    "/requests/{connection_id}/respond",
    response_model=ConnectionEnvelope,
    summary="接受 / 拒絕連結邀請"
)
async def respond_to_connection_request(
    connection_id: int,
    respond_data: ConnectionRespond,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    connection = await ConnectionService(db).respond_to_request(
        user_id, connection_id, respond_data.response
    )
    return {"connection": connection}
