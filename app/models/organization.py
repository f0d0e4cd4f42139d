"""Organization model."""

from sqlalchemy import Boolean, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base


class Organization(Base):
    """Surf school, camp, shop or agency that posts jobs."""

    __tablename__ = "organizations"

    owner_profile_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    slug = Column(String(255), unique=True)
    org_type = Column(String(20), default="other")  # school, camp, shop, agency, other
    city = Column(String(255))
    country = Column(String(100))
    verified = Column(Boolean, default=False)

    # Relationships
    owner = relationship("User", back_populates="organizations")
    jobs = relationship("Job", back_populates="organization", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Organization {self.name}>"
