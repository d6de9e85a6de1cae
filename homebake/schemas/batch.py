"""Production batch schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from homebake.utils.time import ShiftName

BatchStatus = Literal["active", "completed", "cancelled"]


class BatchCreate(BaseModel):
    """Payload for recording a production batch."""

    bread_type_id: int
    actual_quantity: int = Field(ge=1)
    shift: ShiftName
    start_time: datetime | None = None
    notes: str | None = None
    status: BatchStatus = "active"


class BatchUpdate(BaseModel):
    """Partial batch update; omitted fields stay untouched."""

    status: BatchStatus | None = None
    actual_quantity: int | None = Field(default=None, ge=0)
    notes: str | None = None


class BatchRead(BaseModel):
    id: int
    bread_type_id: int
    batch_number: str
    start_time: datetime
    end_time: datetime | None
    actual_quantity: int
    status: str
    notes: str | None
    created_by: int
    shift: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BatchStats(BaseModel):
    """Aggregate batch counters for the production dashboard."""

    total_batches: int
    active_batches: int
    completed_batches: int
    cancelled_batches: int
    total_actual_quantity: int
    today_batches: int
    completion_rate: float
    shift: str


class BatchNumberResponse(BaseModel):
    batch_number: str


class ArchiveResponse(BaseModel):
    shift: str
    archived: int
