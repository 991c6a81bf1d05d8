# models/user.py
from sqlalchemy import Column, Integer, String, TIMESTAMP, func
from sqlalchemy.orm import relationship
from medlink.core.database import Base

class User(Base):
    __tablename__ = "users"

    # 基本欄位
    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    # 關聯設定
    # 1-to-1 醫療專業 Profile
    medical_profile = relationship(
        "MedicalProfile", # <-- 使用字串
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan"
    )

    posts = relationship("Post", back_populates="author")

    # 組織成員身分
    memberships = relationship(
        "OrganizationMember",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    applications = relationship("Application", back_populates="user")
