# medlink/repositories/job_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from typing import List, Optional

from medlink.models.organization import JobPosting
from medlink.utils.pagination import apply_keyset

class JobRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_job_by_id(self, job_posting_id: int) -> Optional[JobPosting]:
        stmt = select(JobPosting).where(JobPosting.id == job_posting_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_job_with_organization(self, job_posting_id: int) -> Optional[JobPosting]:
        stmt = (
            select(JobPosting)
            .where(JobPosting.id == job_posting_id)
            .options(selectinload(JobPosting.organization))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_job(self, job: JobPosting) -> JobPosting:
        self.db.add(job)
        await self.db.commit()
        return await self.get_job_with_organization(job.id)

    # 條件搜尋職缺
    async def list_active_jobs(
        self,
        cursor: Optional[int],
        limit: int,
        specialty: Optional[str] = None,
        location: Optional[str] = None
    ) -> List[JobPosting]:
        """
        只列出開放中的職缺；specialty / location 為不分大小寫的部分比對
        """
        stmt = select(JobPosting).where(JobPosting.is_active.is_(True))
        if specialty:
            stmt = stmt.where(JobPosting.specialty.icontains(specialty, autoescape=True))
        if location:
            stmt = stmt.where(JobPosting.location.icontains(location, autoescape=True))

        stmt = apply_keyset(stmt, JobPosting, cursor, limit).options(
            selectinload(JobPosting.organization),
            selectinload(JobPosting.applications)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()
