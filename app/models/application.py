"""Application model."""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base


class ApplicationStatus(str, Enum):
    """Application status values."""

    PENDING = "pending"
    VIEWED = "viewed"
    CONTACTED = "contacted"
    ARCHIVED = "archived"


class Application(Base):
    """Job application model."""

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_applications_job_applicant"),
        CheckConstraint(
            "status IN ('pending', 'viewed', 'contacted', 'archived')",
            name="status",
        ),
    )

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True)
    applicant_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    message = Column(Text, nullable=False)

    # Status tracking
    status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING.value)
    viewed_at = Column(DateTime, nullable=True)  # first time status became "viewed"
    contacted_at = Column(DateTime, nullable=True)  # first time status became "contacted"

    # Relationships
    job = relationship("Job", back_populates="applications")
    applicant = relationship("User", back_populates="applications")

    def __repr__(self):
        return f"<Application {self.applicant_id} -> {self.job_id} ({self.status})>"
