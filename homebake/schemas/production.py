"""Shift-scoped production and inventory views."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class ShiftWindowRead(BaseModel):
    """UTC bounds of a resolved shift window; both null when cleared."""

    cleared: bool
    start_utc: datetime | None = None
    end_utc: datetime | None = None


class ProductionItem(BaseModel):
    id: int
    bread_type_id: int
    name: str
    size: str | None
    unit_price: Decimal
    quantity: int
    produced: int
    sold: int
    available: int
    batch_number: str
    status: str
    created_by: int
    created_at: datetime


class ShiftProductionResponse(BaseModel):
    production_items: list[ProductionItem]
    total_units: int
    source: str
    is_empty: bool
    shift: str
    current_time: str
    current_hour: int
    window: ShiftWindowRead
    reason: str | None = None
    next_clear_time: str | None = None


class InventoryItem(BaseModel):
    id: int
    name: str
    size: str | None
    price: Decimal
    quantity: int
    batches: int


class ShiftInventoryResponse(BaseModel):
    data: list[InventoryItem]
    total_units: int
    total_batches: int
    shift: str
    source: str
    record_count: int
    window: ShiftWindowRead
    reason: str | None = None


class CurrentShiftResponse(BaseModel):
    current_shift: str
    local_time: str
    windows: dict[str, ShiftWindowRead]
