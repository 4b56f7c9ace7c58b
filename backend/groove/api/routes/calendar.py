"""Schedule preview and calendar feed endpoints."""
from __future__ import annotations

from datetime import date
from time import perf_counter
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from groove.api.schemas.calendar import ScheduledEventPayload, SchedulePreviewResponse
from groove.core.context import bind_user_id
from groove.db.deps import get_db
from groove.observability.metrics import log_metric
from groove.observability.tracing import trace
from groove.services.schedule_service import ScheduleWindowError, build_calendar_feed, build_user_schedule

router = APIRouter()


@router.get("/calendar/schedule", response_model=SchedulePreviewResponse, tags=["calendar"])
def schedule_preview(
    request: Request,
    user_id: UUID = Query(..., description="User ID"),
    start: Optional[date] = Query(default=None, description="First day, defaults to today in the user's timezone"),
    end: Optional[date] = Query(default=None, description="Last day (inclusive)"),
    db: Session = Depends(get_db),
) -> SchedulePreviewResponse:
    """Return the generated events as JSON, without rendering a feed."""
    request_id = getattr(request.state, "request_id", None)
    bind_user_id(user_id)
    metadata = {
        "route": "/calendar/schedule",
        "start": start.isoformat() if start else None,
        "end": end.isoformat() if end else None,
    }
    started = perf_counter()
    with trace("calendar.schedule", metadata=metadata, user_id=user_id, request_id=request_id):
        try:
            schedule = build_user_schedule(db, user_id, start, end)
        except ScheduleWindowError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        except ValueError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    log_metric("calendar.schedule.events", len(schedule.events), metadata={"user_id": str(user_id)})
    log_metric("calendar.schedule.latency_ms", (perf_counter() - started) * 1000, metadata={"user_id": str(user_id)})

    return SchedulePreviewResponse(
        user_id=user_id,
        timezone=schedule.user.timezone,
        window={"start": schedule.window[0], "end": schedule.window[1]},
        events=[
            ScheduledEventPayload(
                habit_id=event.habit_id,
                habit_name=event.habit_name,
                category=event.category,
                priority=event.priority,
                start=event.start,
                end=event.end,
                duration_min=event.duration_min,
            )
            for event in schedule.events
        ],
        request_id=request_id or "",
    )


@router.get("/calendar/feed/{user_id}.ics", tags=["calendar"])
def calendar_feed(
    user_id: UUID,
    request: Request,
    db: Session = Depends(get_db),
) -> Response:
    """Serve the user's habits as a subscribable iCalendar file."""
    request_id = getattr(request.state, "request_id", None)
    bind_user_id(user_id)
    started = perf_counter()
    with trace("calendar.feed", metadata={"route": "/calendar/feed"}, user_id=user_id, request_id=request_id):
        try:
            feed = build_calendar_feed(db, user_id)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    log_metric("calendar.feed.events", feed.event_count, metadata={"user_id": str(user_id)})
    log_metric("calendar.feed.latency_ms", (perf_counter() - started) * 1000, metadata={"user_id": str(user_id)})

    return Response(
        content=feed.body,
        media_type="text/calendar; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{feed.filename}"',
            "Cache-Control": "no-cache, no-store, must-revalidate",
        },
    )
