"""Work-hours settings API routes."""
from __future__ import annotations

from time import perf_counter
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from groove.api.schemas.work_hours import WorkHoursPayload, WorkHoursResponse, WorkHoursUpdateRequest
from groove.core.context import bind_user_id
from groove.db.deps import get_db
from groove.observability.metrics import log_metric
from groove.observability.tracing import trace
from groove.services.user_service import get_user, update_work_hours

router = APIRouter()


@router.get("/work-hours/{user_id}", response_model=WorkHoursResponse, tags=["work-hours"])
def get_work_hours(
    user_id: UUID,
    request: Request,
    db: Session = Depends(get_db),
) -> WorkHoursResponse:
    request_id = getattr(request.state, "request_id", None)
    bind_user_id(user_id)
    with trace("work_hours.get", metadata={"route": "/work-hours"}, user_id=user_id, request_id=request_id):
        try:
            user = get_user(db, user_id)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return WorkHoursResponse(
        user_id=user.id,
        work_hours=WorkHoursPayload.model_validate(user.work_hours) if user.work_hours else None,
        request_id=request_id or "",
    )


@router.put("/work-hours/{user_id}", response_model=WorkHoursResponse, tags=["work-hours"])
def put_work_hours(
    user_id: UUID,
    payload: WorkHoursUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> WorkHoursResponse:
    """Replace the user's weekly work hours; a null body value clears them."""
    request_id = getattr(request.state, "request_id", None)
    bind_user_id(user_id)
    work_hours = payload.work_hours.model_dump() if payload.work_hours else None
    working_days = sum(1 for hours in (work_hours or {}).values() if hours)
    start = perf_counter()

    with trace(
        "work_hours.update",
        metadata={"route": "/work-hours", "working_days": working_days},
        user_id=user_id,
        request_id=request_id,
    ):
        try:
            user = update_work_hours(db, user_id, work_hours)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    log_metric("work_hours.update.success", 1, metadata={"user_id": str(user_id)})
    log_metric("work_hours.update.working_days", working_days, metadata={"user_id": str(user_id)})
    log_metric("work_hours.update.latency_ms", (perf_counter() - start) * 1000, metadata={"user_id": str(user_id)})

    return WorkHoursResponse(
        user_id=user.id,
        work_hours=WorkHoursPayload.model_validate(user.work_hours) if user.work_hours else None,
        request_id=request_id or "",
    )
