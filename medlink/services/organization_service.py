# medlink/services/organization_service.py

import logging
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from medlink.models.organization import Organization
from medlink.repositories.organization_repo import OrganizationRepository
from medlink.repositories.user_repo import UserRepository
from medlink.schemas.organization_schema import OrganizationCreate, MembershipOut, UserOrganizationsOut

logger = logging.getLogger(__name__)

class OrganizationService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.org_repo = OrganizationRepository(db)
        self.user_repo = UserRepository(db)

    async def create_organization(self, user_id: int, org_data: OrganizationCreate) -> Organization:
        """
        建立組織，建立者自動成為 admin
        """
        # 只有有醫療 Profile 的使用者可以建立組織
        user = await self.user_repo.get_user_by_id(user_id)
        if not user or not user.medical_profile:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="使用者不存在或不是醫療專業人員")

        existing = await self.org_repo.get_organization_by_name(org_data.name)
        if existing:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="組織名稱已存在")

        organization = Organization(
            name=org_data.name,
            type=org_data.type,
            description=org_data.description,
            location=org_data.location,
            website=org_data.website,
        )
        try:
            created = await self.org_repo.create_organization_with_admin(organization, user_id)
        except IntegrityError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="組織名稱已存在")

        logger.info(f"Organization {created.id} created, admin User {user_id}")
        return created

    async def get_user_organizations(self, user_id: int) -> UserOrganizationsOut:
        memberships = await self.org_repo.list_memberships_for_user(user_id)
        return UserOrganizationsOut(
            memberships=[MembershipOut.model_validate(m) for m in memberships]
        )
