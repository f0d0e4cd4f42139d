"""Declarative base shared by all models."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, MetaData, Uuid
from sqlalchemy.orm import DeclarativeBase

# Stable constraint names so migrations and error matching agree across backends
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}


class Base(DeclarativeBase):
    """Base class for all models: UUID primary key plus creation/update timestamps."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    # Ids are portable UUIDs (native on PostgreSQL, CHAR(32) on SQLite)
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
