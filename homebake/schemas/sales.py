"""Sales schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from homebake.utils.time import ShiftName


class SalesCreate(BaseModel):
    """A sale recorded by the signed-in user."""

    bread_type_id: int
    quantity: int = Field(ge=1)
    shift: ShiftName
    unit_price: Decimal | None = Field(default=None, ge=0)
    discount: Decimal = Field(default=Decimal("0.00"), ge=0)
    leftovers: int = Field(default=0, ge=0)
    returned: bool = False


class SalesRead(BaseModel):
    id: int
    bread_type_id: int
    quantity: int
    unit_price: Decimal
    discount: Decimal
    returned: bool
    leftovers: int
    shift: str
    recorded_by: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
