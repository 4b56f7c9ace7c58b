"""User ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, DateTime, String, Text, func
from sqlalchemy.dialects.postgresql import UUID

from groove.db.base import Base
from groove.db.types import JSONBCompat


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    email = Column(String(length=320), nullable=False, unique=True)
    name = Column(Text, nullable=False)
    timezone = Column(String(length=50), nullable=False, default="UTC")
    # {"monday": {"start": "09:00", "end": "17:00"} | None, ...}
    work_hours = Column(JSONBCompat, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
