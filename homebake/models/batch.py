"""Production batch models."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homebake.db.base import Base

BATCH_STATUSES = ("active", "completed", "cancelled")
SHIFT_VALUES = ("morning", "night")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Batch(Base):
    """A production run of one bread type during a shift."""

    __tablename__ = "batches"

    id: Mapped[int] = mapped_column(primary_key=True)
    bread_type_id: Mapped[int] = mapped_column(ForeignKey("bread_types.id"), nullable=False)
    batch_number: Mapped[str] = mapped_column(String(16), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    actual_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(Enum(*BATCH_STATUSES, name="batch_status"), nullable=False, default="active")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    shift: Mapped[str] = mapped_column(Enum(*SHIFT_VALUES, name="batch_shift"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    bread_type: Mapped["BreadType"] = relationship(back_populates="batches")

    __table_args__ = (
        UniqueConstraint("bread_type_id", "batch_number", "shift", name="uq_batches_bread_type_number_shift"),
    )


class ArchivedBatch(Base):
    """Batch moved out of the live table when a shift is cleared."""

    __tablename__ = "all_batches"

    id: Mapped[int] = mapped_column(primary_key=True)
    original_batch_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    bread_type_id: Mapped[int] = mapped_column(ForeignKey("bread_types.id"), nullable=False)
    batch_number: Mapped[str] = mapped_column(String(16), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    actual_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(Enum(*BATCH_STATUSES, name="archived_batch_status"), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    shift: Mapped[str] = mapped_column(Enum(*SHIFT_VALUES, name="archived_batch_shift"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    archived_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    bread_type: Mapped["BreadType"] = relationship()
