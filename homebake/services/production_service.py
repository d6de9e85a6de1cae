"""Shift-scoped production and inventory views built on resolved shift windows."""

from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from homebake.models import ArchivedBatch, Batch, SalesLog
from homebake.schemas.production import (
    InventoryItem,
    ProductionItem,
    ShiftInventoryResponse,
    ShiftProductionResponse,
    ShiftWindowRead,
)
from homebake.utils.time import (
    ActiveWindow,
    CivilInstant,
    ShiftName,
    ShiftWindow,
    cleared_reason,
    next_clear_hint,
    resolve,
)

logger = logging.getLogger(__name__)

PRODUCTION_STATUSES: tuple[str, ...] = ("active", "completed")


def within_window(column, window: ActiveWindow):
    """SQL condition for a timestamp column inside the window, both bounds included."""
    return column.between(window.start_utc, window.end_utc)


def window_read(window: ShiftWindow) -> ShiftWindowRead:
    if isinstance(window, ActiveWindow):
        return ShiftWindowRead(cleared=False, start_utc=window.start_utc, end_utc=window.end_utc)
    return ShiftWindowRead(cleared=True)


def shift_batches(
    db: Session,
    *,
    shift: ShiftName,
    window: ActiveWindow,
    statuses: tuple[str, ...] | None = None,
) -> tuple[list[Batch] | list[ArchivedBatch], str]:
    """Return batches created inside the window, falling back to the archive when none are live."""
    for model, source in ((Batch, "batches"), (ArchivedBatch, "all_batches")):
        query = (
            select(model)
            .options(joinedload(model.bread_type))
            .where(
                model.shift == shift.value,
                within_window(model.created_at, window),
            )
        )
        if statuses is not None:
            query = query.where(model.status.in_(statuses))
        rows = list(db.scalars(query.order_by(model.created_at.desc(), model.id.desc())).unique().all())
        if rows:
            logger.info("[SHIFT] %s %s rows from %s", len(rows), shift.value, source)
            return rows, source
    return [], "batches"


def sold_quantities(
    db: Session,
    *,
    shift: ShiftName,
    window: ActiveWindow,
    recorded_by: int | None = None,
) -> dict[int, int]:
    query = (
        select(SalesLog.bread_type_id, func.sum(SalesLog.quantity))
        .where(
            SalesLog.shift == shift.value,
            within_window(SalesLog.created_at, window),
        )
        .group_by(SalesLog.bread_type_id)
    )
    if recorded_by is not None:
        query = query.where(SalesLog.recorded_by == recorded_by)
    return {bread_type_id: int(total or 0) for bread_type_id, total in db.execute(query).all()}


def _allocate_sales(batches: list[Batch] | list[ArchivedBatch], sold: dict[int, int]) -> dict[int, int]:
    """Spread each bread type's sold units over its batches, oldest batch first."""
    remaining = dict(sold)
    allocated: dict[int, int] = {}
    for batch in sorted(batches, key=lambda item: (item.created_at, item.id)):
        produced = batch.actual_quantity or 0
        taken = min(produced, remaining.get(batch.bread_type_id, 0))
        allocated[batch.id] = taken
        remaining[batch.bread_type_id] = remaining.get(batch.bread_type_id, 0) - taken
    return allocated


def shift_production(db: Session, *, shift: ShiftName, now: CivilInstant) -> ShiftProductionResponse:
    """Production available to sales representatives for the shift's current occurrence."""
    window = resolve(shift, now)
    base = {
        "shift": shift.value,
        "current_time": now.isoformat(),
        "current_hour": now.hour,
        "window": window_read(window),
    }
    if not isinstance(window, ActiveWindow):
        logger.info("[SHIFT] %s production cleared at %s", shift.value, now.isoformat())
        return ShiftProductionResponse(
            production_items=[],
            total_units=0,
            source="cleared",
            is_empty=True,
            reason=cleared_reason(shift),
            next_clear_time=next_clear_hint(shift),
            **base,
        )

    batches, source = shift_batches(db, shift=shift, window=window, statuses=PRODUCTION_STATUSES)
    allocated = _allocate_sales(batches, sold_quantities(db, shift=shift, window=window))

    items: list[ProductionItem] = []
    for batch in batches:
        produced = batch.actual_quantity or 0
        sold = allocated.get(batch.id, 0)
        bread_type = batch.bread_type
        items.append(
            ProductionItem(
                id=batch.id,
                bread_type_id=batch.bread_type_id,
                name=bread_type.name if bread_type is not None else "Unknown",
                size=bread_type.size if bread_type is not None else None,
                unit_price=bread_type.unit_price if bread_type is not None else Decimal("0.00"),
                quantity=produced,
                produced=produced,
                sold=sold,
                available=max(0, produced - sold),
                batch_number=batch.batch_number,
                status=batch.status,
                created_by=batch.created_by,
                created_at=batch.created_at,
            )
        )

    return ShiftProductionResponse(
        production_items=items,
        total_units=sum(item.quantity for item in items),
        source=source,
        is_empty=not items,
        **base,
    )


def shift_inventory(db: Session, *, shift: ShiftName, now: CivilInstant) -> ShiftInventoryResponse:
    """Units produced in the shift's current occurrence, grouped by bread type."""
    window = resolve(shift, now)
    if not isinstance(window, ActiveWindow):
        return ShiftInventoryResponse(
            data=[],
            total_units=0,
            total_batches=0,
            shift=shift.value,
            source="cleared",
            record_count=0,
            window=window_read(window),
            reason=cleared_reason(shift),
        )

    batches, source = shift_batches(db, shift=shift, window=window)
    grouped: dict[int, dict] = defaultdict(lambda: {"quantity": 0, "batches": 0})
    for batch in batches:
        bread_type = batch.bread_type
        if bread_type is None:
            continue
        entry = grouped[bread_type.id]
        entry.update(id=bread_type.id, name=bread_type.name, size=bread_type.size, price=bread_type.unit_price)
        entry["quantity"] += batch.actual_quantity or 0
        entry["batches"] += 1

    inventory = sorted((InventoryItem(**entry) for entry in grouped.values()), key=lambda item: item.name.lower())
    return ShiftInventoryResponse(
        data=inventory,
        total_units=sum(item.quantity for item in inventory),
        total_batches=sum(item.batches for item in inventory),
        shift=shift.value,
        source=source,
        record_count=len(batches),
        window=window_read(window),
    )
