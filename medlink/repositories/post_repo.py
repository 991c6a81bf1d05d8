# medlink/repositories/post_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from typing import List, Optional

from medlink.models.post import Post, Like, Comment
from medlink.models.user import User
from medlink.utils.pagination import apply_keyset

class PostRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _post_load_options(self):
        # 作者 + Profile、所有讚 (含按讚者)、所有留言 (含留言者 + Profile)
        return (
            selectinload(Post.author).selectinload(User.medical_profile),
            selectinload(Post.likes).selectinload(Like.user),
            selectinload(Post.comments).selectinload(Comment.user).selectinload(User.medical_profile),
        )

    async def get_post_by_id(self, post_id: int) -> Optional[Post]:
        stmt = select(Post).where(Post.id == post_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_post_with_relations(self, post_id: int) -> Optional[Post]:
        stmt = (
            select(Post)
            .where(Post.id == post_id)
            .options(*self._post_load_options())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_feed(self, cursor: Optional[int], limit: int) -> List[Post]:
        """
        取得動態牆 (由新到舊)，多取一筆用於判斷下一頁
        """
        stmt = apply_keyset(select(Post), Post, cursor, limit).options(*self._post_load_options())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_post(self, post: Post) -> Post:
        self.db.add(post)
        await self.db.commit()
        return await self.get_post_with_relations(post.id)

    # --- Like ---
    async def get_like(self, user_id: int, post_id: int) -> Optional[Like]:
        stmt = select(Like).where(Like.user_id == user_id, Like.post_id == post_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_like(self, like: Like) -> Like:
        self.db.add(like)
        await self.db.commit()
        return like

    async def delete_like(self, like: Like) -> None:
        await self.db.delete(like)
        await self.db.commit()

    # --- Comment ---
    async def create_comment(self, comment: Comment) -> Comment:
        self.db.add(comment)
        await self.db.commit()
        stmt = (
            select(Comment)
            .where(Comment.id == comment.id)
            .options(selectinload(Comment.user).selectinload(User.medical_profile))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()
