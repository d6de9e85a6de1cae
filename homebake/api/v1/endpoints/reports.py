"""Shift report and shift feedback endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from homebake.core.security import get_current_user, require_roles
from homebake.db.session import get_db
from homebake.models import ShiftFeedback, ShiftReport, User
from homebake.schemas.report import EndShiftRequest, FeedbackCreate, FeedbackRead, ShiftReportRead
from homebake.services.guards import SUPERVISOR_ROLES, optional_shift
from homebake.services.report_service import (
    add_feedback,
    get_report,
    list_feedback,
    list_reports,
    submit_end_shift,
)
from homebake.utils.time import now_local

router: APIRouter = APIRouter()


@router.post("/reports/end-shift", response_model=ShiftReportRead, status_code=status.HTTP_201_CREATED)
def post_end_shift(
    payload: EndShiftRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("sales_rep", "manager")),
) -> ShiftReport:
    return submit_end_shift(db, user=current_user, payload=payload, now=now_local())


@router.get("/reports", response_model=list[ShiftReportRead])
def get_reports(
    shift: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ShiftReport]:
    return list_reports(db, user=current_user, shift=optional_shift(shift))


@router.get("/reports/{report_id}", response_model=ShiftReportRead)
def get_report_by_id(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ShiftReport:
    return get_report(db, user=current_user, report_id=report_id)


@router.post("/shift-feedback", response_model=FeedbackRead, status_code=status.HTTP_201_CREATED)
def post_feedback(
    payload: FeedbackCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ShiftFeedback:
    return add_feedback(db, user=current_user, shift=payload.shift, note=payload.note)


@router.get("/shift-feedback", response_model=list[FeedbackRead])
def get_feedback(
    user_id: int | None = Query(default=None),
    shift: str | None = Query(default=None),
    date_value: date | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ShiftFeedback]:
    """Supervisors may filter by any user; everyone else sees their own notes."""
    if current_user.role not in SUPERVISOR_ROLES:
        user_id = current_user.id
    return list_feedback(db, user_id=user_id, shift=optional_shift(shift), day=date_value)
