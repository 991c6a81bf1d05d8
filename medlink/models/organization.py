# models/organization.py
import enum
from sqlalchemy import Column, Integer, String, TEXT, Boolean, Enum, ForeignKey, TIMESTAMP, UniqueConstraint, func
from sqlalchemy.orm import relationship
from medlink.core.database import Base

# 對應 SQL 中的 ENUM 型別
class MemberRoleEnum(str, enum.Enum):
    admin = "admin"
    member = "member"

class Organization(Base):
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, index=True, nullable=False)
    type = Column(String(100), nullable=False) # e.g. Hospital, Clinic
    description = Column(TEXT)
    location = Column(String(255))
    website = Column(String(500))
    created_at = Column(TIMESTAMP, server_default=func.now())

    members = relationship(
        "OrganizationMember",
        back_populates="organization",
        cascade="all, delete-orphan"
    )
    # 職缺依時間由新到舊
    job_postings = relationship(
        "JobPosting",
        back_populates="organization",
        cascade="all, delete-orphan",
        order_by="[JobPosting.created_at.desc(), JobPosting.id.desc()]"
    )

class OrganizationMember(Base):
    __tablename__ = "organization_members"
    __table_args__ = (UniqueConstraint("user_id", "organization_id", name="uq_member_user_org"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(
        Enum(MemberRoleEnum, values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=MemberRoleEnum.member
    )
    created_at = Column(TIMESTAMP, server_default=func.now())

    user = relationship("User", back_populates="memberships")
    organization = relationship("Organization", back_populates="members")

class JobPosting(Base):
    __tablename__ = "job_postings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(TEXT, nullable=False)
    requirements = Column(TEXT, nullable=False)
    salary = Column(String(100))
    location = Column(String(255), nullable=False)
    job_type = Column(String(100), nullable=False) # e.g. Full-time
    specialty = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)

    organization = relationship("Organization", back_populates="job_postings")
    applications = relationship(
        "Application",
        back_populates="job_posting",
        cascade="all, delete-orphan"
    )
