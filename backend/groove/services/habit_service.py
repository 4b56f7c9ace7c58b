"""Persistence helpers for habits and their completions."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.orm import Session

from groove.api.schemas.habit import (
    CompletionCreateRequest,
    CompletionResponse,
    FrequencyPayload,
    HabitCreateRequest,
    HabitResponse,
    HabitUpdateRequest,
)
from groove.db.models.habit import Habit
from groove.db.models.habit_completion import HabitCompletion
from groove.services.scheduling.base import HabitSpec, RecurrenceRule
from groove.services.user_service import get_user


def get_habit(db: Session, habit_id: UUID) -> Habit:
    habit = db.get(Habit, habit_id)
    if not habit:
        raise ValueError("Habit not found")
    return habit


def list_habits(db: Session, user_id: UUID) -> List[Habit]:
    """A user's habits, most recently updated first."""
    return (
        db.query(Habit)
        .filter(Habit.user_id == user_id)
        .order_by(desc(Habit.updated_at), desc(Habit.created_at))
        .all()
    )


def list_active_habits(db: Session, user_id: UUID) -> List[Habit]:
    return [habit for habit in list_habits(db, user_id) if habit.active]


def create_habit(db: Session, payload: HabitCreateRequest) -> Habit:
    get_user(db, payload.user_id)
    habit = Habit(
        user_id=payload.user_id,
        name=payload.name,
        description=payload.description,
        category=payload.category,
        priority=payload.priority,
        duration_min=payload.duration_min,
        tags=list(payload.tags),
        active=payload.active,
        **_frequency_columns(payload.frequency),
    )
    db.add(habit)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(habit)
    return habit


def update_habit(db: Session, habit_id: UUID, payload: HabitUpdateRequest) -> Habit:
    """Apply the fields present in ``payload``; omitted fields stay as they are."""
    habit = get_habit(db, habit_id)
    changes = payload.model_dump(exclude_unset=True)
    frequency = changes.pop("frequency", None)
    if frequency is not None:
        changes.update(_frequency_columns(FrequencyPayload(**frequency)))
    for field_name, value in changes.items():
        if field_name in {"name", "category", "priority", "duration_min", "active", "tags"} and value is None:
            continue
        setattr(habit, field_name, value)
    # updated_at drives list ordering; bump it even when only JSON columns changed.
    habit.updated_at = datetime.now(timezone.utc)
    db.add(habit)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(habit)
    return habit


def delete_habit(db: Session, habit_id: UUID) -> None:
    habit = get_habit(db, habit_id)
    db.delete(habit)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


def record_completion(db: Session, habit_id: UUID, payload: CompletionCreateRequest) -> HabitCompletion:
    habit = get_habit(db, habit_id)
    if habit.user_id != payload.user_id:
        raise PermissionError("Habit does not belong to user")
    completion = HabitCompletion(
        habit_id=habit.id,
        user_id=habit.user_id,
        completed_at=payload.completed_at or datetime.now(timezone.utc),
        scheduled_for=payload.scheduled_for,
        notes=payload.notes,
    )
    db.add(completion)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(completion)
    return completion


def list_completions(db: Session, habit_id: UUID) -> List[HabitCompletion]:
    get_habit(db, habit_id)
    return (
        db.query(HabitCompletion)
        .filter(HabitCompletion.habit_id == habit_id)
        .order_by(desc(HabitCompletion.completed_at))
        .all()
    )


def list_user_completions(db: Session, user_id: UUID) -> List[HabitCompletion]:
    return (
        db.query(HabitCompletion)
        .filter(HabitCompletion.user_id == user_id)
        .order_by(desc(HabitCompletion.completed_at))
        .all()
    )


def to_habit_spec(habit: Habit) -> HabitSpec:
    """Snapshot an ORM habit into the value the scheduler reads."""
    weekdays = habit.frequency_weekdays
    return HabitSpec(
        id=str(habit.id),
        name=habit.name,
        category=habit.category,
        priority=habit.priority,
        duration_min=int(habit.duration_min),
        rule=RecurrenceRule(
            type=habit.frequency_type,
            interval=int(habit.frequency_interval or 1),
            weekdays=frozenset(weekdays) if weekdays is not None else None,
        ),
        active=bool(habit.active),
    )


def serialize_habit(habit: Habit) -> HabitResponse:
    return HabitResponse(
        id=habit.id,
        user_id=habit.user_id,
        name=habit.name,
        description=habit.description,
        category=habit.category,
        priority=habit.priority,
        frequency=FrequencyPayload(
            type=habit.frequency_type,
            interval=habit.frequency_interval,
            weekdays=habit.frequency_weekdays,
        ),
        duration_min=habit.duration_min,
        tags=list(habit.tags or []),
        active=bool(habit.active),
        created_at=habit.created_at,
        updated_at=habit.updated_at,
    )


def serialize_completion(completion: HabitCompletion) -> CompletionResponse:
    return CompletionResponse(
        id=completion.id,
        habit_id=completion.habit_id,
        user_id=completion.user_id,
        completed_at=completion.completed_at,
        scheduled_for=completion.scheduled_for,
        notes=completion.notes,
    )


def _frequency_columns(frequency: FrequencyPayload) -> Dict[str, Any]:
    weekdays = frequency.weekdays if frequency.type == "weekly" else None
    return {
        "frequency_type": frequency.type,
        "frequency_interval": frequency.interval,
        "frequency_weekdays": list(weekdays) if weekdays is not None else None,
    }
