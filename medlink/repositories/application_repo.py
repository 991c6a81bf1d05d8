# medlink/repositories/application_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from typing import List, Optional

from medlink.models.application import Application
from medlink.models.organization import JobPosting
from medlink.models.user import User

class ApplicationRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _detail_options(self):
        return (
            selectinload(Application.user).selectinload(User.medical_profile),
            selectinload(Application.job_posting).selectinload(JobPosting.organization),
        )

    async def get_application_by_id(self, application_id: int) -> Optional[Application]:
        """
        透過 ID 獲取應徵紀錄，並載入職缺 (用於權限檢查)
        """
        stmt = (
            select(Application)
            .where(Application.id == application_id)
            .options(*self._detail_options())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def check_existing_application(self, user_id: int, job_posting_id: int) -> Optional[Application]:
        """
        檢查特定使用者是否已應徵特定職缺
        """
        stmt = select(Application).where(
            Application.user_id == user_id,
            Application.job_posting_id == job_posting_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_by_job_id(self, job_posting_id: int) -> List[Application]:
        """
        職缺的所有應徵者 (由新到舊)，含應徵者 Profile
        """
        stmt = (
            select(Application)
            .where(Application.job_posting_id == job_posting_id)
            .options(selectinload(Application.user).selectinload(User.medical_profile))
            .order_by(Application.created_at.desc(), Application.id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_application(self, application: Application) -> Application:
        self.db.add(application)
        await self.db.commit()
        return await self.get_application_by_id(application.id)

    async def update_application(self, application: Application) -> Application:
        """
        更新應徵紀錄 (主要用於更新 status)
        """
        await self.db.commit()
        return await self.get_application_by_id(application.id)
