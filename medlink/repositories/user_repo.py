# medlink/repositories/user_repo.py
# 負責與使用者相關的資料庫操作
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from medlink.models.user import User
from medlink.models.medical_profile import MedicalProfile

class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> User | None:
        """
        透過 email 查詢使用者 (含醫療 Profile)
        """
        stmt = (
            select(User)
            .where(User.email == email)
            .options(selectinload(User.medical_profile))
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_user_by_id(self, user_id: int) -> User | None:
        """
        透過 id 查詢使用者 (含醫療 Profile)
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.medical_profile))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_user_with_profile(self, user: User, profile: MedicalProfile) -> User:
        """
        新增使用者與其醫療 Profile (同一次 commit)
        """
        user.medical_profile = profile
        self.db.add(user)
        await self.db.commit()
        return await self.get_user_by_id(user.id)
