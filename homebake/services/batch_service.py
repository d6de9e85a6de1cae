"""Production batch numbering, lifecycle and statistics."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from homebake.models import ArchivedBatch, Batch, BreadType, User
from homebake.schemas.batch import BatchCreate, BatchStats, BatchUpdate
from homebake.services.activity_service import log_activity
from homebake.utils.time import ShiftName, civil_day_window

logger = logging.getLogger(__name__)

BATCH_NUMBER_WIDTH = 3
MAX_NUMBERING_ATTEMPTS = 3
NULLABLE_BATCH_FIELDS = frozenset({"notes"})
_TRAILING_DIGITS = re.compile(r"(\d+)$")


class BatchNumberError(Exception):
    """Raised when a unique batch number could not be allocated."""


def get_bread_type_or_404(db: Session, bread_type_id: int) -> BreadType:
    bread_type = db.get(BreadType, bread_type_id)
    if bread_type is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bread type not found")
    return bread_type


def next_batch_number(db: Session, bread_type_id: int, shift: ShiftName) -> str:
    """Return the next zero-padded batch number for a bread type within a shift."""
    numbers = db.scalars(
        select(Batch.batch_number).where(Batch.bread_type_id == bread_type_id, Batch.shift == shift.value)
    ).all()
    highest = 0
    for number in numbers:
        match = _TRAILING_DIGITS.search(number or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return str(highest + 1).zfill(BATCH_NUMBER_WIDTH)


def create_batch(db: Session, *, user: User, payload: BatchCreate) -> Batch:
    """Record a batch under the next free number, retrying if a concurrent insert takes it."""
    bread_type = get_bread_type_or_404(db, payload.bread_type_id)

    for attempt in range(1, MAX_NUMBERING_ATTEMPTS + 1):
        batch = Batch(
            bread_type_id=bread_type.id,
            batch_number=next_batch_number(db, bread_type.id, payload.shift),
            actual_quantity=payload.actual_quantity,
            notes=payload.notes,
            status=payload.status,
            shift=payload.shift.value,
            created_by=user.id,
            start_time=payload.start_time or datetime.now(timezone.utc),
        )
        if payload.status == "completed":
            batch.end_time = datetime.now(timezone.utc)
        db.add(batch)
        try:
            db.flush()
        except IntegrityError:
            db.rollback()
            logger.warning("[BATCH] Number collision on attempt %s for bread_type_id=%s", attempt, bread_type.id)
            continue

        if user.role != "owner":
            log_activity(
                db,
                actor=user,
                action_type="batch_created",
                shift=batch.shift,
                details={
                    "bread_type": bread_type.name,
                    "quantity": batch.actual_quantity,
                    "batch_number": batch.batch_number,
                },
            )
        db.commit()
        db.refresh(batch)
        logger.info("[BATCH] Created %s #%s (%s shift)", bread_type.name, batch.batch_number, batch.shift)
        return batch

    raise BatchNumberError("Could not allocate a unique batch number")


def list_user_batches(
    db: Session,
    *,
    user: User,
    status_value: str | None = None,
    shift: ShiftName | None = None,
) -> list[Batch]:
    query = select(Batch).where(Batch.created_by == user.id)
    if status_value is not None:
        query = query.where(Batch.status == status_value)
    if shift is not None:
        query = query.where(Batch.shift == shift.value)
    return list(db.scalars(query.order_by(Batch.created_at.desc(), Batch.id.desc())).all())


def get_batch_or_404(db: Session, batch_id: int) -> Batch:
    batch = db.get(Batch, batch_id)
    if batch is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Batch not found")
    return batch


def update_batch(db: Session, batch: Batch, payload: BatchUpdate) -> Batch:
    changes = payload.model_dump(exclude_unset=True)
    # only notes may be cleared; status and quantity are required columns
    changes = {field: value for field, value in changes.items() if value is not None or field in NULLABLE_BATCH_FIELDS}
    for field, value in changes.items():
        setattr(batch, field, value)
    if changes.get("status") == "completed" and batch.end_time is None:
        batch.end_time = datetime.now(timezone.utc)
    db.commit()
    db.refresh(batch)
    return batch


def delete_batch(db: Session, batch: Batch) -> None:
    db.delete(batch)
    db.commit()
    logger.info("[BATCH] Deleted batch_id=%s", batch.id)


def batch_stats(db: Session, *, shift: ShiftName | None, today: date) -> BatchStats:
    query = select(Batch.status, Batch.actual_quantity, Batch.created_at)
    if shift is not None:
        query = query.where(Batch.shift == shift.value)
    rows = db.execute(query).all()

    day_start, day_end = civil_day_window(today)
    today_batches = 0
    for row in rows:
        created_at = row.created_at if row.created_at.tzinfo else row.created_at.replace(tzinfo=timezone.utc)
        if day_start <= created_at < day_end:
            today_batches += 1

    total = len(rows)
    completed = sum(1 for row in rows if row.status == "completed")
    return BatchStats(
        total_batches=total,
        active_batches=sum(1 for row in rows if row.status == "active"),
        completed_batches=completed,
        cancelled_batches=sum(1 for row in rows if row.status == "cancelled"),
        total_actual_quantity=sum(row.actual_quantity or 0 for row in rows),
        today_batches=today_batches,
        completion_rate=(completed / total) * 100 if total else 0.0,
        shift=shift.value if shift is not None else "all",
    )


def archive_shift_batches(db: Session, *, user: User, shift: ShiftName) -> int:
    """Move a shift's live batches into the archive table."""
    batches = db.scalars(select(Batch).where(Batch.shift == shift.value)).all()
    for batch in batches:
        db.add(
            ArchivedBatch(
                original_batch_id=batch.id,
                bread_type_id=batch.bread_type_id,
                batch_number=batch.batch_number,
                start_time=batch.start_time,
                end_time=batch.end_time,
                actual_quantity=batch.actual_quantity,
                status=batch.status,
                notes=batch.notes,
                created_by=batch.created_by,
                shift=batch.shift,
                created_at=batch.created_at,
            )
        )
        db.delete(batch)
    log_activity(db, actor=user, action_type="batches_archived", shift=shift.value, details={"count": len(batches)})
    db.commit()
    logger.info("[BATCH] Archived %s %s-shift batches", len(batches), shift.value)
    return len(batches)
