# models/application.py
import enum
from sqlalchemy import Column, Integer, String, TEXT, Enum, ForeignKey, TIMESTAMP, UniqueConstraint, func
from sqlalchemy.orm import relationship
from medlink.core.database import Base

class ApplicationStatus(str, enum.Enum):
    pending = "pending"
    reviewed = "reviewed"
    accepted = "accepted"
    rejected = "rejected"

# 目前不限制狀態流向：任何狀態都可以改成任何狀態 (包含 accepted -> pending)
APPLICATION_TRANSITIONS = {
    current: set(ApplicationStatus) for current in ApplicationStatus
}

def can_transition_application(current: ApplicationStatus, new: ApplicationStatus) -> bool:
    return new in APPLICATION_TRANSITIONS[ApplicationStatus(current)]

class Application(Base):
    __tablename__ = "applications"
    # 同一人對同一職缺只能應徵一次
    __table_args__ = (UniqueConstraint("user_id", "job_posting_id", name="uq_application_user_job"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_posting_id = Column(Integer, ForeignKey("job_postings.id", ondelete="CASCADE"), nullable=False, index=True)
    cover_letter = Column(TEXT)
    resume_url = Column(String(500)) # 物件儲存上的履歷 URL
    status = Column(
        Enum(ApplicationStatus, values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=ApplicationStatus.pending
    )
    created_at = Column(TIMESTAMP, server_default=func.now())

    user = relationship("User", back_populates="applications")
    job_posting = relationship("JobPosting", back_populates="applications")
