"""Shift-window views: sales-rep production, shift inventory and current shift."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from homebake.core.security import get_current_user
from homebake.db.session import get_db
from homebake.models import User
from homebake.schemas.production import CurrentShiftResponse, ShiftInventoryResponse, ShiftProductionResponse
from homebake.services.guards import ensure_shift
from homebake.services.production_service import shift_inventory, shift_production, window_read
from homebake.utils.time import ShiftName, current_shift, now_local, resolve

router: APIRouter = APIRouter()


@router.get("/production/shift", response_model=ShiftProductionResponse)
def get_shift_production(
    shift: str | None = Query(default=None),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> ShiftProductionResponse:
    """Batches of the shift's current occurrence with sold and available units."""
    return shift_production(db, shift=ensure_shift(shift), now=now_local())


@router.get("/inventory/shift", response_model=ShiftInventoryResponse)
def get_shift_inventory(
    shift: str | None = Query(default=None),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> ShiftInventoryResponse:
    return shift_inventory(db, shift=ensure_shift(shift), now=now_local())


@router.get("/shifts/current", response_model=CurrentShiftResponse)
def get_current_shift(_current_user: User = Depends(get_current_user)) -> CurrentShiftResponse:
    now = now_local()
    return CurrentShiftResponse(
        current_shift=current_shift(now).value,
        local_time=now.isoformat(),
        windows={shift.value: window_read(resolve(shift, now)) for shift in ShiftName},
    )
