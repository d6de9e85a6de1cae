"""Request-level guards shared by the API endpoints."""

from __future__ import annotations

from fastapi import HTTPException, status

from homebake.models import ShiftReport, User
from homebake.utils.time import InvalidArgument, ShiftName

SUPERVISOR_ROLES: set[str] = {"owner", "manager"}


def ensure_shift(value: str | None) -> ShiftName:
    """Parse a ``shift`` query parameter or reject the request with 400."""
    try:
        return ShiftName.parse(value)
    except InvalidArgument as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Valid shift (morning or night) is required",
        ) from exc


def optional_shift(value: str | None) -> ShiftName | None:
    if value is None or value == "":
        return None
    return ensure_shift(value)


def ensure_can_view_report(user: User, report: ShiftReport) -> None:
    """Owners and managers see every report, others only their own; 404 avoids leaking ids."""
    if user.role in SUPERVISOR_ROLES:
        return
    if report.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")
