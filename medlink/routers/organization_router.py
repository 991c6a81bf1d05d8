# medlink/routers/organization_router.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.core.database import get_db
from medlink.core.security import get_current_user_id
from medlink.services.organization_service import OrganizationService
from medlink.schemas.organization_schema import (
    OrganizationCreate, OrganizationCreateOut, UserOrganizationsOut
)

router = APIRouter(
    prefix="/organizations",
    tags=["Organizations"],
    dependencies=[Depends(get_current_user_id)] # 重要：此 router 下所有 API 都需要登入
)


@router.post("", response_model=OrganizationCreateOut, status_code=status.HTTP_201_CREATED, summary="建立組織")
async def create_organization(
    org_data: OrganizationCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    建立組織，建立者自動成為 admin
    """
    organization = await OrganizationService(db).create_organization(user_id, org_data)
    return {"organization": organization, "success": True}


@router.get("/mine", response_model=UserOrganizationsOut, summary="我的組織")
async def get_user_organizations(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    return await OrganizationService(db).get_user_organizations(user_id)
