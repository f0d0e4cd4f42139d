"""User model."""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class User(Base):
    """Profile behind an authenticated identity (crew member or organization admin)."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    display_name = Column(String(150), nullable=False)
    kind = Column(String(20), nullable=False, default="person")  # person, org
    country = Column(String(100))
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    organizations = relationship("Organization", back_populates="owner")
    applications = relationship("Application", back_populates="applicant")

    def __repr__(self):
        return f"<User {self.email} ({self.kind})>"
