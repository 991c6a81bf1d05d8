# models/medical_profile.py
from sqlalchemy import Column, Integer, String, TEXT, ForeignKey
from sqlalchemy.orm import relationship
from medlink.core.database import Base

class MedicalProfile(Base):
    __tablename__ = "medical_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    profession_type = Column(String(100), nullable=False) # e.g. Doctor, Nurse
    specialty = Column(String(255), nullable=False)
    years_of_experience = Column(Integer, nullable=False, default=0)
    license_number = Column(String(100))
    current_position = Column(String(255))
    bio = Column(TEXT)
    location = Column(String(255))
    profile_picture_url = Column(String(500))

    # 1-to-1 反向關聯到 User
    user = relationship("User", back_populates="medical_profile")
