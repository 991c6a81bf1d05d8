# medlink/services/application_service.py

import logging
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from medlink.models.application import Application, ApplicationStatus, can_transition_application
from medlink.repositories.application_repo import ApplicationRepository
from medlink.repositories.job_repo import JobRepository
from medlink.repositories.organization_repo import OrganizationRepository
from medlink.repositories.user_repo import UserRepository
from medlink.schemas.application_schema import ApplicationCreate, ApplicantOut, JobApplicationsOut
from medlink.schemas.organization_schema import JobPostingWithOrganizationOut

logger = logging.getLogger(__name__)

class ApplicationService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.application_repo = ApplicationRepository(db)
        self.job_repo = JobRepository(db)
        self.org_repo = OrganizationRepository(db)
        self.user_repo = UserRepository(db)

    async def apply_to_job(self, user_id: int, job_posting_id: int, application_data: ApplicationCreate) -> Application:
        # 步驟 1: 驗證
        user = await self.user_repo.get_user_by_id(user_id)
        if not user or not user.medical_profile:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="使用者不存在或不是醫療專業人員")

        job = await self.job_repo.get_job_by_id(job_posting_id)
        if not job or not job.is_active:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="職缺不存在或已關閉")

        existing = await self.application_repo.check_existing_application(user_id, job_posting_id)
        if existing:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="你已經應徵過此職缺")

        # 步驟 2: 儲存
        new_application = Application(
            user_id=user_id,
            job_posting_id=job_posting_id,
            cover_letter=application_data.cover_letter,
            resume_url=application_data.resume_url,
            status=ApplicationStatus.pending,
        )
        try:
            created = await self.application_repo.create_application(new_application)
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="你已經應徵過此職缺")

        logger.info(f"Application {created.id}: User {user_id} -> JobPosting {job_posting_id}")
        return created

    async def get_job_applications(self, user_id: int, job_posting_id: int) -> JobApplicationsOut:
        """
        (組織 admin) 檢視職缺的所有應徵者
        """
        job = await self.job_repo.get_job_with_organization(job_posting_id)
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="職缺不存在")

        if not await self.org_repo.is_admin(user_id, job.organization_id):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="你沒有權限檢視此職缺的應徵者")

        applications = await self.application_repo.list_by_job_id(job_posting_id)
        return JobApplicationsOut(
            applications=[ApplicantOut.model_validate(a) for a in applications],
            job_posting=JobPostingWithOrganizationOut.model_validate(job),
        )

    async def update_application_status(
        self, user_id: int, application_id: int, new_status: ApplicationStatus
    ) -> Application:
        """
        (組織 admin) 更新應徵狀態
        """
        application = await self.application_repo.get_application_by_id(application_id)
        if not application:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="應徵紀錄不存在")

        if not await self.org_repo.is_admin(user_id, application.job_posting.organization_id):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="你沒有權限修改此應徵紀錄")

        if not can_transition_application(application.status, new_status):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="無效的狀態")

        application.status = new_status
        updated = await self.application_repo.update_application(application)
        logger.info(f"Application {application_id} -> {new_status.value} by User {user_id}")
        return updated
