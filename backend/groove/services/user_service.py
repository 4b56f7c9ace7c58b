"""Helpers for working with users."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from groove.db.models.user import User

logger = logging.getLogger(__name__)


class DuplicateEmailError(ValueError):
    """Raised when a user with the same email already exists."""


def get_user(db: Session, user_id: UUID) -> User:
    """Fetch a user or raise ValueError when the id is unknown."""
    user = db.get(User, user_id)
    if not user:
        raise ValueError("User not found")
    return user


def create_user(
    db: Session,
    *,
    email: str,
    name: str,
    timezone: str,
    work_hours: Optional[Dict[str, Any]] = None,
) -> User:
    """Insert a user; emails are unique, compared case-insensitively."""
    normalized_email = email.strip().lower()
    if db.query(User).filter(User.email == normalized_email).first():
        raise DuplicateEmailError("User with this email already exists")

    user = User(email=normalized_email, name=name, timezone=timezone, work_hours=work_hours)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateEmailError("User with this email already exists") from exc
    db.refresh(user)
    logger.info("Created user %s", user.id)
    return user


def update_work_hours(db: Session, user_id: UUID, work_hours: Optional[Dict[str, Any]]) -> User:
    """Replace a user's work hours; None clears them."""
    user = get_user(db, user_id)
    user.work_hours = work_hours
    db.add(user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    return user
