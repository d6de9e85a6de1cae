"""Production batch endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from homebake.core.security import get_current_user, require_roles
from homebake.db.session import get_db
from homebake.models import Batch, User
from homebake.schemas.batch import (
    ArchiveResponse,
    BatchCreate,
    BatchNumberResponse,
    BatchRead,
    BatchStats,
    BatchUpdate,
)
from homebake.services.batch_service import (
    BatchNumberError,
    archive_shift_batches,
    batch_stats,
    create_batch,
    delete_batch,
    get_batch_or_404,
    get_bread_type_or_404,
    list_user_batches,
    next_batch_number,
    update_batch,
)
from homebake.services.guards import ensure_shift, optional_shift
from homebake.utils.time import now_local

router: APIRouter = APIRouter()


@router.post("", response_model=BatchRead, status_code=status.HTTP_201_CREATED)
def post_batch(
    payload: BatchCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("owner", "manager")),
) -> Batch:
    try:
        return create_batch(db, user=current_user, payload=payload)
    except BatchNumberError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.get("", response_model=list[BatchRead])
def get_my_batches(
    status_value: Literal["active", "completed", "cancelled"] | None = Query(default=None, alias="status"),
    shift: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Batch]:
    """Return the current user's batches, newest first."""
    return list_user_batches(db, user=current_user, status_value=status_value, shift=optional_shift(shift))


@router.get("/stats", response_model=BatchStats)
def get_batch_stats(
    shift: str | None = Query(default=None),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> BatchStats:
    return batch_stats(db, shift=optional_shift(shift), today=now_local().date())


@router.get("/next-number/{bread_type_id}", response_model=BatchNumberResponse)
def get_next_batch_number(
    bread_type_id: int,
    shift: str | None = Query(default=None),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> BatchNumberResponse:
    shift_name = ensure_shift(shift)
    get_bread_type_or_404(db, bread_type_id)
    return BatchNumberResponse(batch_number=next_batch_number(db, bread_type_id, shift_name))


@router.post("/archive", response_model=ArchiveResponse)
def post_archive(
    shift: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("owner", "manager")),
) -> ArchiveResponse:
    shift_name = ensure_shift(shift)
    archived = archive_shift_batches(db, user=current_user, shift=shift_name)
    return ArchiveResponse(shift=shift_name.value, archived=archived)


@router.put("/{batch_id}", response_model=BatchRead)
def put_batch(
    batch_id: int,
    payload: BatchUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("owner", "manager")),
) -> Batch:
    return update_batch(db, get_batch_or_404(db, batch_id), payload)


@router.delete("/{batch_id}")
def remove_batch(
    batch_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("owner", "manager")),
) -> dict[str, bool]:
    delete_batch(db, get_batch_or_404(db, batch_id))
    return {"success": True}
