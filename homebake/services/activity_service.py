"""Activity feed helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from homebake.models import ActivityLog, User


def log_activity(
    db: Session,
    *,
    actor: User | None,
    action_type: str,
    shift: str | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    actor_name = "system"
    actor_id = None
    if actor is not None:
        actor_id = actor.id
        actor_name = actor.name or actor.email

    db.add(
        ActivityLog(
            actor_user_id=actor_id,
            actor_name=actor_name,
            action_type=action_type,
            shift=shift,
            details=details,
        )
    )


def recent_activities(db: Session, limit: int = 50) -> list[ActivityLog]:
    return list(
        db.scalars(
            select(ActivityLog).order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc()).limit(limit)
        ).all()
    )
