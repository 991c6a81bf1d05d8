# medlink/schemas/application_schema.py
from datetime import datetime
from typing import List, Optional
from pydantic import Field
from medlink.schemas.base_schema import CamelModel
from medlink.schemas.user_schema import UserWithProfileOut
from medlink.schemas.organization_schema import JobPostingOut, JobPostingWithOrganizationOut, OrganizationOut
from medlink.models.application import ApplicationStatus

class ApplicationCreate(CamelModel):
    # job_posting_id 從 URL 取得
    cover_letter: Optional[str] = None
    # 客戶端透過 presigned URL 上傳後取得的檔案 URL
    resume_url: Optional[str] = Field(None, max_length=500)

class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus

class ApplicationOut(CamelModel):
    id: int
    user_id: int
    job_posting_id: int
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    status: ApplicationStatus
    created_at: datetime

# --- 包含關聯資料的完整輸出 ---
class ApplicationDetailOut(ApplicationOut):
    user: Optional[UserWithProfileOut] = None
    job_posting: Optional[JobPostingWithOrganizationOut] = None

class ApplicationEnvelope(CamelModel):
    application: ApplicationDetailOut

class ApplicationUpdateOut(CamelModel):
    application: ApplicationDetailOut
    success: bool = True

class ApplicantOut(ApplicationOut):
    user: Optional[UserWithProfileOut] = None

class JobApplicationsOut(CamelModel):
    applications: List[ApplicantOut]
    job_posting: JobPostingWithOrganizationOut

# 職缺列表 (公開)：包含組織與應徵紀錄
class JobPostingListItemOut(JobPostingOut):
    organization: OrganizationOut
    applications: List[ApplicationOut] = []

class JobPostingPageOut(CamelModel):
    job_postings: List[JobPostingListItemOut]
    next_cursor: Optional[int] = None
