# medlink/repositories/organization_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from typing import List, Optional

from medlink.models.organization import Organization, OrganizationMember, JobPosting, MemberRoleEnum

class OrganizationRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_organization_by_name(self, name: str) -> Optional[Organization]:
        stmt = select(Organization).where(Organization.name == name)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_membership(self, user_id: int, organization_id: int) -> Optional[OrganizationMember]:
        stmt = select(OrganizationMember).where(
            OrganizationMember.user_id == user_id,
            OrganizationMember.organization_id == organization_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def is_admin(self, user_id: int, organization_id: int) -> bool:
        membership = await self.get_membership(user_id, organization_id)
        return membership is not None and membership.role == MemberRoleEnum.admin

    async def create_organization_with_admin(self, organization: Organization, admin_user_id: int) -> Organization:
        """
        建立組織，並將建立者設為 admin。
        兩筆資料在同一個交易中寫入：任一失敗就整筆 rollback。
        """
        try:
            self.db.add(organization)
            await self.db.flush() # 取得 organization.id
            self.db.add(OrganizationMember(
                user_id=admin_user_id,
                organization_id=organization.id,
                role=MemberRoleEnum.admin
            ))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        stmt = (
            select(Organization)
            .where(Organization.id == organization.id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_memberships_for_user(self, user_id: int) -> List[OrganizationMember]:
        """
        使用者的所有組織身分，並載入組織的「開放中」職缺
        """
        stmt = (
            select(OrganizationMember)
            .where(OrganizationMember.user_id == user_id)
            .options(
                selectinload(OrganizationMember.organization)
                .selectinload(Organization.job_postings.and_(JobPosting.is_active.is_(True)))
            )
            .order_by(OrganizationMember.created_at.desc(), OrganizationMember.id.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()
