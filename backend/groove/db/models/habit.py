"""Habit ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, func, text as sa_text
from sqlalchemy.dialects.postgresql import UUID

from groove.db.base import Base
from groove.db.types import JSONBCompat


class Habit(Base):
    __tablename__ = "habits"
    __table_args__ = (
        Index("ix_habits_user_id", "user_id"),
        Index("ix_habits_active", "active"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(length=32), nullable=False)
    priority = Column(String(length=16), nullable=False)
    frequency_type = Column(String(length=16), nullable=False)
    frequency_interval = Column(Integer, nullable=False, default=1)
    frequency_weekdays = Column(JSONBCompat, nullable=True)
    duration_min = Column(Integer, nullable=False)
    tags = Column(JSONBCompat, nullable=False, default=list)
    active = Column(Boolean, nullable=False, default=True, server_default=sa_text("true"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
