"""Bread catalogue schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class BreadTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    size: str | None = None
    unit_price: Decimal = Field(ge=0)


class BreadTypeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    size: str | None = None
    unit_price: Decimal | None = Field(default=None, ge=0)


class BreadTypeRead(BaseModel):
    id: int
    name: str
    size: str | None
    unit_price: Decimal

    model_config = ConfigDict(from_attributes=True)
