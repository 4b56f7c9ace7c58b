"""User record API routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from groove.api.schemas.user import UserCreateRequest, UserResponse
from groove.api.schemas.work_hours import WorkHoursPayload
from groove.core.context import bind_user_id
from groove.db.deps import get_db
from groove.db.models.user import User
from groove.observability.metrics import log_metric
from groove.observability.tracing import trace
from groove.services.user_service import DuplicateEmailError, create_user, get_user

router = APIRouter()


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED, tags=["users"])
def create_user_endpoint(
    payload: UserCreateRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> UserResponse:
    """Register a user record with an optional work-hours configuration."""
    request_id = getattr(http_request.state, "request_id", None)
    work_hours = payload.work_hours.model_dump() if payload.work_hours else None

    with trace("user.create", metadata={"route": "/users", "timezone": payload.timezone}, request_id=request_id):
        try:
            user = create_user(
                db,
                email=payload.email,
                name=payload.name,
                timezone=payload.timezone,
                work_hours=work_hours,
            )
        except DuplicateEmailError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    bind_user_id(user.id)
    log_metric("user.create.success", 1, metadata={"has_work_hours": work_hours is not None})
    return _serialize_user(user, request_id)


@router.get("/users/{user_id}", response_model=UserResponse, tags=["users"])
def get_user_endpoint(
    user_id: UUID,
    http_request: Request,
    db: Session = Depends(get_db),
) -> UserResponse:
    request_id = getattr(http_request.state, "request_id", None)
    bind_user_id(user_id)
    try:
        user = get_user(db, user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return _serialize_user(user, request_id)


def _serialize_user(user: User, request_id: str | None) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        timezone=user.timezone,
        work_hours=WorkHoursPayload.model_validate(user.work_hours) if user.work_hours else None,
        created_at=user.created_at,
        request_id=request_id or "",
    )
