"""Sales recording and lookup."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from homebake.models import SalesLog, User
from homebake.schemas.sales import SalesCreate
from homebake.services.activity_service import log_activity
from homebake.services.batch_service import get_bread_type_or_404
from homebake.utils.time import ShiftName, civil_day_window

logger = logging.getLogger(__name__)


def record_sale(db: Session, *, user: User, payload: SalesCreate) -> SalesLog:
    """Record a sale for the signed-in user at the bread type's price unless one is given."""
    bread_type = get_bread_type_or_404(db, payload.bread_type_id)
    sale = SalesLog(
        bread_type_id=bread_type.id,
        quantity=payload.quantity,
        unit_price=payload.unit_price if payload.unit_price is not None else bread_type.unit_price,
        discount=payload.discount,
        leftovers=payload.leftovers,
        returned=payload.returned,
        shift=payload.shift.value,
        recorded_by=user.id,
    )
    db.add(sale)
    log_activity(
        db,
        actor=user,
        action_type="sale_recorded",
        shift=sale.shift,
        details={"bread_type": bread_type.name, "quantity": sale.quantity},
    )
    db.commit()
    db.refresh(sale)
    logger.info("[SALES] user_id=%s sold %s x %s", user.id, sale.quantity, bread_type.name)
    return sale


def list_sales(
    db: Session,
    *,
    user: User,
    shift: ShiftName | None = None,
    day: date | None = None,
) -> list[SalesLog]:
    query = select(SalesLog).where(SalesLog.recorded_by == user.id)
    if shift is not None:
        query = query.where(SalesLog.shift == shift.value)
    if day is not None:
        start, end = civil_day_window(day)
        query = query.where(SalesLog.created_at >= start, SalesLog.created_at < end)
    return list(db.scalars(query.order_by(SalesLog.created_at.desc(), SalesLog.id.desc())).all())
