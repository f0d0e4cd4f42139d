"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization

# Base models (no foreign keys)
from app.models.user import User

# Models with foreign keys to base models
from app.models.organization import Organization
from app.models.job import Job

# Models with foreign keys to other models
from app.models.application import Application, ApplicationStatus

# Export all models
__all__ = [
    "User",
    "Organization",
    "Job",
    "Application",
    "ApplicationStatus",
]
