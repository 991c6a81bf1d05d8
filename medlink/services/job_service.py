# medlink/services/job_service.py

import logging
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.models.organization import JobPosting
from medlink.repositories.job_repo import JobRepository
from medlink.repositories.organization_repo import OrganizationRepository
from medlink.schemas.organization_schema import JobPostingCreate
from medlink.schemas.application_schema import JobPostingListItemOut, JobPostingPageOut
from medlink.utils.pagination import split_page

logger = logging.getLogger(__name__)

class JobService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.job_repo = JobRepository(db)
        self.org_repo = OrganizationRepository(db)

    async def create_job_posting(self, user_id: int, job_data: JobPostingCreate) -> JobPosting:
        """
        (組織 admin) 刊登職缺
        """
        if not await self.org_repo.is_admin(user_id, job_data.organization_id):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="你沒有權限為此組織刊登職缺")

        job = JobPosting(**job_data.model_dump())
        created = await self.job_repo.create_job(job)
        logger.info(f"JobPosting {created.id} created in Organization {job_data.organization_id}")
        return created

    async def list_job_postings(
        self,
        cursor: Optional[int],
        limit: int,
        specialty: Optional[str] = None,
        location: Optional[str] = None
    ) -> JobPostingPageOut:
        rows = await self.job_repo.list_active_jobs(cursor, limit, specialty, location)
        jobs, next_cursor = split_page(rows, limit)
        return JobPostingPageOut(
            job_postings=[JobPostingListItemOut.model_validate(j) for j in jobs],
            next_cursor=next_cursor,
        )
