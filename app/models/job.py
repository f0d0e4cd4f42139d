"""Job model."""

from sqlalchemy import Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id"), nullable=False, index=True)
    title = Column(String(500), nullable=False, index=True)
    role = Column(String(20), default="other")  # coach, media, camp_staff, ops, other
    description = Column(Text)

    # Location
    city = Column(String(255))
    country = Column(String(100))

    # Status
    status = Column(String(20), default="pending", index=True)  # pending, active, closed

    # Relationships
    organization = relationship("Organization", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Job {self.title} at {self.organization_id}>"
