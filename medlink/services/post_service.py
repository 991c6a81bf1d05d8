# medlink/services/post_service.py

import logging
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from medlink.models.post import Post, Like, Comment
from medlink.repositories.post_repo import PostRepository
from medlink.schemas.post_schema import PostCreate, CommentCreate, FeedOut, PostOut, LikeToggleOut
from medlink.utils.pagination import split_page

logger = logging.getLogger(__name__)

class PostService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.post_repo = PostRepository(db)

    async def create_post(self, author_id: int, post_data: PostCreate) -> Post:
        new_post = Post(
            author_id=author_id,
            content=post_data.content,
            image_url=post_data.image_url,
        )
        created = await self.post_repo.create_post(new_post)
        logger.info(f"Post {created.id} created by User {author_id}")
        return created

    async def get_feed(self, cursor: Optional[int], limit: int) -> FeedOut:
        """
        動態牆 (公開)：由新到舊，keyset 分頁
        """
        rows = await self.post_repo.list_feed(cursor, limit)
        posts, next_cursor = split_page(rows, limit)
        return FeedOut(
            posts=[PostOut.model_validate(p) for p in posts],
            next_cursor=next_cursor,
        )

    async def _get_post_or_404(self, post_id: int) -> Post:
        post = await self.post_repo.get_post_by_id(post_id)
        if not post:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="貼文不存在")
        return post

    async def toggle_like(self, user_id: int, post_id: int) -> LikeToggleOut:
        """
        按讚 / 收回讚：已按過就刪除，沒按過就新增
        """
        await self._get_post_or_404(post_id)

        existing_like = await self.post_repo.get_like(user_id, post_id)
        if existing_like:
            await self.post_repo.delete_like(existing_like)
            return LikeToggleOut(liked=False)

        try:
            await self.post_repo.create_like(Like(user_id=user_id, post_id=post_id))
        except IntegrityError:
            # 同一使用者同時送出兩次按讚
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="已經按過讚")
        return LikeToggleOut(liked=True)

    async def add_comment(self, user_id: int, post_id: int, comment_data: CommentCreate) -> Comment:
        await self._get_post_or_404(post_id)
        comment = Comment(
            user_id=user_id,
            post_id=post_id,
            content=comment_data.content,
        )
        return await self.post_repo.create_comment(comment)
