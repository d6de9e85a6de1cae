"""End-of-shift reports and shift feedback."""

from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from homebake.models import RemainingBread, SalesLog, ShiftFeedback, ShiftReport, User
from homebake.schemas.report import EndShiftRequest
from homebake.services.activity_service import log_activity
from homebake.services.batch_service import get_bread_type_or_404
from homebake.services.guards import SUPERVISOR_ROLES, ensure_can_view_report
from homebake.services.production_service import within_window
from homebake.utils.time import ActiveWindow, CivilInstant, ShiftName, civil_day_window, resolve

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _money(value: Decimal) -> str:
    return str(Decimal(value).quantize(CENTS))


def _shift_sales(db: Session, *, user: User, shift: ShiftName, window: ActiveWindow) -> list[SalesLog]:
    return list(
        db.scalars(
            select(SalesLog)
            .options(joinedload(SalesLog.bread_type))
            .where(
                SalesLog.recorded_by == user.id,
                SalesLog.shift == shift.value,
                SalesLog.returned.is_(False),
                within_window(SalesLog.created_at, window),
            )
            .order_by(SalesLog.created_at.asc(), SalesLog.id.asc())
        ).all()
    )


def summarize_sales(sales: list[SalesLog]) -> tuple[list[dict], Decimal, int]:
    """Group sales by bread type; returns (rows, revenue, items sold).

    Lines of one bread type may carry different prices, so each row reports the
    quantity-weighted average price before discounts.
    """
    grouped: OrderedDict[int, dict] = OrderedDict()
    for sale in sales:
        row = grouped.setdefault(
            sale.bread_type_id,
            {
                "bread_type_id": sale.bread_type_id,
                "bread_type_name": sale.bread_type.name if sale.bread_type is not None else "Unknown",
                "quantity": 0,
                "gross_amount": Decimal("0.00"),
                "total_amount": Decimal("0.00"),
            },
        )
        gross = Decimal(sale.quantity) * sale.unit_price
        row["quantity"] += sale.quantity
        row["gross_amount"] += gross
        row["total_amount"] += gross - (sale.discount or Decimal("0.00"))

    revenue = sum((row["total_amount"] for row in grouped.values()), Decimal("0.00"))
    items_sold = sum(row["quantity"] for row in grouped.values())
    for row in grouped.values():
        gross_amount = row.pop("gross_amount")
        row["average_unit_price"] = _money(gross_amount / row["quantity"])
        row["total_amount"] = _money(row["total_amount"])
    return list(grouped.values()), revenue, items_sold


def submit_end_shift(db: Session, *, user: User, payload: EndShiftRequest, now: CivilInstant) -> ShiftReport:
    """Close out a shift: snapshot the user's sales in the current window and record leftovers."""
    shift = payload.shift
    window = resolve(shift, now)
    if isinstance(window, ActiveWindow):
        sales = _shift_sales(db, user=user, shift=shift, window=window)
        report_date: date = CivilInstant.from_utc(window.start_utc).date()
    else:
        logger.info("[REPORT] %s window cleared at %s; submitting without sales", shift.value, now.isoformat())
        sales = []
        report_date = now.date()

    sales_data, revenue, items_sold = summarize_sales(sales)

    remaining_breads: list[dict] = []
    for entry in payload.remaining:
        if entry.quantity <= 0:
            continue
        bread_type = get_bread_type_or_404(db, entry.bread_type_id)
        db.add(
            RemainingBread(
                shift=shift.value,
                bread_type_id=bread_type.id,
                quantity=entry.quantity,
                unit_price=bread_type.unit_price,
                recorded_by=user.id,
            )
        )
        remaining_breads.append(
            {
                "bread_type_id": bread_type.id,
                "bread_type_name": bread_type.name,
                "quantity": entry.quantity,
                "unit_price": _money(bread_type.unit_price),
                "total_value": _money(Decimal(entry.quantity) * bread_type.unit_price),
            }
        )

    report = ShiftReport(
        user_id=user.id,
        shift=shift.value,
        report_date=report_date,
        total_revenue=revenue.quantize(CENTS),
        total_items_sold=items_sold,
        total_remaining=sum(item["quantity"] for item in remaining_breads),
        feedback=(payload.feedback or "").strip() or None,
        sales_data=sales_data,
        remaining_breads=remaining_breads,
    )
    db.add(report)
    db.flush()
    log_activity(
        db,
        actor=user,
        action_type="shift_report_submitted",
        shift=shift.value,
        details={"report_id": report.id, "total_revenue": _money(revenue), "items_sold": items_sold},
    )
    db.commit()
    db.refresh(report)
    logger.info("[REPORT] user_id=%s submitted %s report_id=%s", user.id, shift.value, report.id)
    return report


def list_reports(db: Session, *, user: User, shift: ShiftName | None = None) -> list[ShiftReport]:
    query = select(ShiftReport)
    if user.role not in SUPERVISOR_ROLES:
        query = query.where(ShiftReport.user_id == user.id)
    if shift is not None:
        query = query.where(ShiftReport.shift == shift.value)
    return list(db.scalars(query.order_by(ShiftReport.created_at.desc(), ShiftReport.id.desc())).all())


def get_report(db: Session, *, user: User, report_id: int) -> ShiftReport:
    report = db.get(ShiftReport, report_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")
    ensure_can_view_report(user, report)
    return report


def add_feedback(db: Session, *, user: User, shift: ShiftName, note: str) -> ShiftFeedback:
    feedback = ShiftFeedback(user_id=user.id, shift=shift.value, note=note.strip())
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback


def list_feedback(
    db: Session,
    *,
    user_id: int | None = None,
    shift: ShiftName | None = None,
    day: date | None = None,
) -> list[ShiftFeedback]:
    query = select(ShiftFeedback)
    if user_id is not None:
        query = query.where(ShiftFeedback.user_id == user_id)
    if shift is not None:
        query = query.where(ShiftFeedback.shift == shift.value)
    if day is not None:
        start, end = civil_day_window(day)
        query = query.where(ShiftFeedback.created_at >= start, ShiftFeedback.created_at < end)
    return list(db.scalars(query.order_by(ShiftFeedback.created_at.desc(), ShiftFeedback.id.desc())).all())
