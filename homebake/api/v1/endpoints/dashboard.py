"""Owner and manager dashboard endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from homebake.core.config import settings
from homebake.core.security import require_roles
from homebake.db.session import get_db
from homebake.models import ActivityLog, User
from homebake.schemas.report import ActivityRead
from homebake.schemas.user import StaffOnlineResponse
from homebake.services.activity_service import recent_activities
from homebake.services.user_service import staff_online

router: APIRouter = APIRouter()


@router.get("/staff-online", response_model=StaffOnlineResponse)
def get_staff_online(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("owner", "manager")),
) -> StaffOnlineResponse:
    now = datetime.now(timezone.utc)
    online, total, by_role = staff_online(db, now=now, window_minutes=settings.staff_online_minutes)
    return StaffOnlineResponse(online=online, total=total, by_role=by_role, timestamp=now)


@router.get("/activities", response_model=list[ActivityRead])
def get_activities(
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("owner")),
) -> list[ActivityLog]:
    return recent_activities(db, limit=limit)
