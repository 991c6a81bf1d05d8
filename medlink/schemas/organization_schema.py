# medlink/schemas/organization_schema.py
from pydantic import AfterValidator, Field, HttpUrl, TypeAdapter, ValidationError
from datetime import datetime
from typing import Annotated, List, Optional
from medlink.schemas.base_schema import CamelModel
from medlink.models.organization import MemberRoleEnum

_http_url_adapter = TypeAdapter(HttpUrl)

def _check_http_url(value: str) -> str:
    # 只驗證格式，儲存使用者輸入的原始字串 (不補結尾的 /)
    try:
        _http_url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("網站必須是有效的 http(s) URL")
    return value

WebsiteUrl = Annotated[str, Field(max_length=500), AfterValidator(_check_http_url)]

class OrganizationCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    website: Optional[WebsiteUrl] = Field(None, description="組織網站 URL")

class OrganizationOut(CamelModel):
    id: int
    name: str
    type: str
    description: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    created_at: datetime

class OrganizationCreateOut(CamelModel):
    organization: OrganizationOut
    success: bool = True

# --- 職缺 ---
class JobPostingCreate(CamelModel):
    organization_id: int
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    requirements: str = Field(..., min_length=1)
    salary: Optional[str] = Field(None, max_length=100)
    location: str = Field(..., min_length=1, max_length=255)
    job_type: str = Field(..., min_length=1, max_length=100)
    specialty: str = Field(..., min_length=1, max_length=255)

class JobPostingOut(CamelModel):
    id: int
    organization_id: int
    title: str
    description: str
    requirements: str
    salary: Optional[str] = None
    location: str
    job_type: str
    specialty: str
    is_active: bool
    created_at: datetime

class JobPostingWithOrganizationOut(JobPostingOut):
    organization: OrganizationOut

class JobPostingCreateOut(CamelModel):
    job_posting: JobPostingWithOrganizationOut
    success: bool = True

# --- 我的組織 ---
class OrganizationWithJobsOut(OrganizationOut):
    job_postings: List[JobPostingOut] = []

class MembershipOut(CamelModel):
    id: int
    user_id: int
    organization_id: int
    role: MemberRoleEnum
    created_at: datetime
    organization: OrganizationWithJobsOut

class UserOrganizationsOut(CamelModel):
    memberships: List[MembershipOut]
