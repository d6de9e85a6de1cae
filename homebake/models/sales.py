"""Sales and leftover models."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homebake.db.base import Base
from homebake.models.batch import SHIFT_VALUES


class SalesLog(Base):
    """A sale recorded by a sales representative."""

    __tablename__ = "sales_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    bread_type_id: Mapped[int] = mapped_column(ForeignKey("bread_types.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    returned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    leftovers: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    shift: Mapped[str] = mapped_column(Enum(*SHIFT_VALUES, name="sales_shift"), nullable=False, index=True)
    recorded_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    bread_type: Mapped["BreadType"] = relationship()


class RemainingBread(Base):
    """Unsold loaves counted at the end of a shift."""

    __tablename__ = "remaining_bread"

    id: Mapped[int] = mapped_column(primary_key=True)
    shift: Mapped[str] = mapped_column(Enum(*SHIFT_VALUES, name="remaining_shift"), nullable=False)
    bread_type_id: Mapped[int] = mapped_column(ForeignKey("bread_types.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    recorded_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    bread_type: Mapped["BreadType"] = relationship()

    @property
    def total_value(self) -> Decimal:
        return Decimal(self.quantity) * self.unit_price
