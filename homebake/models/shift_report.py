"""End-of-shift report and feedback models."""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import JSON, Date, DateTime, Enum, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from homebake.db.base import Base
from homebake.models.batch import SHIFT_VALUES


class ShiftReport(Base):
    """Snapshot of a sales representative's shift at handoff."""

    __tablename__ = "shift_reports"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    shift: Mapped[str] = mapped_column(Enum(*SHIFT_VALUES, name="report_shift"), nullable=False, index=True)
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    total_revenue: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))
    total_items_sold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    sales_data: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    remaining_breads: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))


class ShiftFeedback(Base):
    """Free-text note left by staff about a shift."""

    __tablename__ = "shift_feedback"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    shift: Mapped[str] = mapped_column(Enum(*SHIFT_VALUES, name="feedback_shift"), nullable=False)
    note: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
