"""Habit completion ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Index, Text, func
from sqlalchemy.dialects.postgresql import UUID

from groove.db.base import Base


class HabitCompletion(Base):
    __tablename__ = "habit_completions"
    __table_args__ = (
        Index("ix_habit_completions_habit_id", "habit_id"),
        Index("ix_habit_completions_user_id", "user_id"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    habit_id = Column(UUID(as_uuid=True), ForeignKey("habits.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    scheduled_for = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
