# medlink/routers/post_router.py

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.core.database import get_db
from medlink.core.security import get_current_user_id
from medlink.services.post_service import PostService
from medlink.schemas.post_schema import (
    PostCreate, PostOut, FeedOut, CommentCreate, CommentOut, LikeToggleOut
)

router = APIRouter(prefix="/posts", tags=["Feed"])


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED, summary="發表貼文")
async def create_post(
    post_data: PostCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await PostService(db).create_post(user_id, post_data)


@router.get("/feed", response_model=FeedOut, summary="動態牆")
async def get_feed(
    cursor: Optional[int] = Query(None, description="上一頁回傳的 nextCursor"),
    limit: int = Query(10, ge=1, le=50),
    db: AsyncSession = Depends(get_db)
):
    """
    公開的動態牆，由新到舊。
    nextCursor 是下一頁的第一筆貼文 id，帶回 cursor 即可接續。
    每則貼文包含作者、所有讚與所有留言 (留言由舊到新)。
    """
    return await PostService(db).get_feed(cursor, limit)


@router.post("/{post_id}/like", response_model=LikeToggleOut, summary="按讚 / 收回讚")
async def like_post(
    post_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await PostService(db).toggle_like(user_id, post_id)


@router.post(
    "/{post_id}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
    summary="新增留言"
)
async def add_comment(
    post_id: int,
    comment_data: CommentCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await PostService(db).add_comment(user_id, post_id, comment_data)
