"""Habit management API routes."""
from __future__ import annotations

from time import perf_counter
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from groove.api.schemas.habit import (
    CompletionCreateRequest,
    CompletionResponse,
    HabitCreateRequest,
    HabitResponse,
    HabitUpdateRequest,
)
from groove.core.context import bind_user_id
from groove.db.deps import get_db
from groove.observability.metrics import log_metric
from groove.observability.tracing import trace
from groove.services.habit_service import (
    create_habit,
    delete_habit,
    get_habit,
    list_completions,
    list_habits,
    record_completion,
    serialize_completion,
    serialize_habit,
    update_habit,
)

router = APIRouter()


@router.get("/habits", response_model=List[HabitResponse], tags=["habits"])
def list_habits_endpoint(
    request: Request,
    user_id: UUID = Query(..., description="User ID owning the habits"),
    db: Session = Depends(get_db),
) -> List[HabitResponse]:
    request_id = getattr(request.state, "request_id", None)
    bind_user_id(user_id)
    with trace("habit.list", metadata={"route": "/habits"}, user_id=user_id, request_id=request_id):
        habits = list_habits(db, user_id)

    log_metric("habit.list.count", len(habits), metadata={"user_id": str(user_id)})
    return [serialize_habit(habit) for habit in habits]


@router.post("/habits", response_model=HabitResponse, status_code=status.HTTP_201_CREATED, tags=["habits"])
def create_habit_endpoint(
    payload: HabitCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> HabitResponse:
    request_id = getattr(request.state, "request_id", None)
    bind_user_id(payload.user_id)
    metadata = {
        "route": "/habits",
        "category": payload.category,
        "priority": payload.priority,
        "frequency_type": payload.frequency.type,
        "duration_min": payload.duration_min,
    }
    start = perf_counter()
    with trace("habit.create", metadata=metadata, user_id=payload.user_id, request_id=request_id):
        try:
            habit = create_habit(db, payload)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    log_metric("habit.create.success", 1, metadata={"category": payload.category})
    log_metric("habit.create.latency_ms", (perf_counter() - start) * 1000)
    return serialize_habit(habit)


@router.get("/habits/{habit_id}", response_model=HabitResponse, tags=["habits"])
def get_habit_endpoint(
    habit_id: UUID,
    db: Session = Depends(get_db),
) -> HabitResponse:
    try:
        habit = get_habit(db, habit_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")
    return serialize_habit(habit)


@router.put("/habits/{habit_id}", response_model=HabitResponse, tags=["habits"])
def update_habit_endpoint(
    habit_id: UUID,
    payload: HabitUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> HabitResponse:
    """Update the fields present in the body."""
    request_id = getattr(request.state, "request_id", None)
    fields = sorted(payload.model_dump(exclude_unset=True).keys())
    with trace(
        "habit.update",
        metadata={"route": f"/habits/{habit_id}", "habit_id": str(habit_id), "fields": fields},
        request_id=request_id,
    ):
        try:
            habit = update_habit(db, habit_id, payload)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")

    log_metric("habit.update.success", 1, metadata={"habit_id": str(habit_id), "fields": len(fields)})
    return serialize_habit(habit)


@router.delete("/habits/{habit_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["habits"])
def delete_habit_endpoint(
    habit_id: UUID,
    request: Request,
    db: Session = Depends(get_db),
) -> Response:
    request_id = getattr(request.state, "request_id", None)
    with trace("habit.delete", metadata={"habit_id": str(habit_id)}, request_id=request_id):
        try:
            delete_habit(db, habit_id)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")

    log_metric("habit.delete.success", 1, metadata={"habit_id": str(habit_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/habits/{habit_id}/completions",
    response_model=CompletionResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["habits"],
)
def record_completion_endpoint(
    habit_id: UUID,
    payload: CompletionCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> CompletionResponse:
    request_id = getattr(request.state, "request_id", None)
    bind_user_id(payload.user_id)
    with trace(
        "habit.complete",
        metadata={"habit_id": str(habit_id), "has_notes": bool(payload.notes)},
        user_id=payload.user_id,
        request_id=request_id,
    ):
        try:
            completion = record_completion(db, habit_id, payload)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")
        except PermissionError:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Habit does not belong to user")

    log_metric("habit.complete.success", 1, metadata={"habit_id": str(habit_id)})
    return serialize_completion(completion)


@router.get("/habits/{habit_id}/completions", response_model=List[CompletionResponse], tags=["habits"])
def list_completions_endpoint(
    habit_id: UUID,
    db: Session = Depends(get_db),
) -> List[CompletionResponse]:
    try:
        completions = list_completions(db, habit_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")
    return [serialize_completion(item) for item in completions]
