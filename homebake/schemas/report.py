"""Shift report, feedback and activity schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from homebake.utils.time import ShiftName


class RemainingBreadPayload(BaseModel):
    bread_type_id: int
    quantity: int = Field(ge=0)


class EndShiftRequest(BaseModel):
    """Handoff payload submitted when a sales representative ends a shift."""

    shift: ShiftName
    remaining: list[RemainingBreadPayload] = Field(default_factory=list)
    feedback: str | None = None


class ShiftReportRead(BaseModel):
    id: int
    user_id: int
    shift: str
    report_date: date
    total_revenue: Decimal
    total_items_sold: int
    total_remaining: int
    feedback: str | None
    sales_data: list[dict[str, Any]]
    remaining_breads: list[dict[str, Any]]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FeedbackCreate(BaseModel):
    shift: ShiftName
    note: str = Field(min_length=1)


class FeedbackRead(BaseModel):
    id: int
    user_id: int
    shift: str
    note: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ActivityRead(BaseModel):
    id: int
    timestamp: datetime
    actor_user_id: int | None
    actor_name: str
    action_type: str
    shift: str | None
    details: dict[str, Any] | None

    model_config = ConfigDict(from_attributes=True)
