# medlink/routers/job_router.py

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.core.database import get_db
from medlink.core.security import get_current_user_id
from medlink.services.job_service import JobService
from medlink.services.application_service import ApplicationService
from medlink.schemas.organization_schema import JobPostingCreate, JobPostingCreateOut
from medlink.schemas.application_schema import (
    ApplicationCreate, ApplicationEnvelope, JobApplicationsOut, JobPostingPageOut
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=JobPostingPageOut, summary="職缺列表")
async def list_job_postings(
    cursor: Optional[int] = Query(None, description="上一頁回傳的 nextCursor"),
    limit: int = Query(10, ge=1, le=50),
    specialty: Optional[str] = Query(None, description="專科 (部分比對，不分大小寫)"),
    location: Optional[str] = Query(None, description="地點 (部分比對，不分大小寫)"),
    db: AsyncSession = Depends(get_db)
):
    """
    公開的職缺列表，只包含開放中的職缺。
    nextCursor 是下一頁的第一筆職缺 id，帶回 cursor 即可接續。
    """
    return await JobService(db).list_job_postings(cursor, limit, specialty, location)


@router.post("", response_model=JobPostingCreateOut, status_code=status.HTTP_201_CREATED, summary="刊登職缺")
async def create_job_posting(
    job_data: JobPostingCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    (組織 admin) 刊登職缺
    """
    job = await JobService(db).create_job_posting(user_id, job_data)
    return {"job_posting": job, "success": True}


@router.post(
    "/{job_posting_id}/applications",
    response_model=ApplicationEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="應徵職缺"
)
async def apply_to_job(
    job_posting_id: int,
    application_data: ApplicationCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    resume_url 由客戶端先透過 /uploads/resume-url 上傳後取得
    """
    application = await ApplicationService(db).apply_to_job(user_id, job_posting_id, application_data)
    return {"application": application}


@router.get(
    "/{job_posting_id}/applications",
    response_model=JobApplicationsOut,
    summary="檢視職缺的應徵者"
)
async def get_job_applications(
    job_posting_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await ApplicationService(db).get_job_applications(user_id, job_posting_id)
