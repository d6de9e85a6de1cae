"""Schema exports."""

from homebake.schemas.auth import LoginRequest, SignupRequest, TokenResponse
from homebake.schemas.batch import BatchCreate, BatchRead, BatchStats, BatchUpdate
from homebake.schemas.bread_type import BreadTypeCreate, BreadTypeRead, BreadTypeUpdate
from homebake.schemas.production import (
    CurrentShiftResponse,
    InventoryItem,
    ProductionItem,
    ShiftInventoryResponse,
    ShiftProductionResponse,
    ShiftWindowRead,
)
from homebake.schemas.report import (
    ActivityRead,
    EndShiftRequest,
    FeedbackCreate,
    FeedbackRead,
    RemainingBreadPayload,
    ShiftReportRead,
)
from homebake.schemas.sales import SalesCreate, SalesRead
from homebake.schemas.user import InviteCreate, InviteRead, StaffOnlineResponse, UserRead, UserRoleUpdate

__all__ = [
    "LoginRequest",
    "SignupRequest",
    "TokenResponse",
    "BatchCreate",
    "BatchRead",
    "BatchStats",
    "BatchUpdate",
    "BreadTypeCreate",
    "BreadTypeRead",
    "BreadTypeUpdate",
    "CurrentShiftResponse",
    "InventoryItem",
    "ProductionItem",
    "ShiftInventoryResponse",
    "ShiftProductionResponse",
    "ShiftWindowRead",
    "ActivityRead",
    "EndShiftRequest",
    "FeedbackCreate",
    "FeedbackRead",
    "RemainingBreadPayload",
    "ShiftReportRead",
    "SalesCreate",
    "SalesRead",
    "InviteCreate",
    "InviteRead",
    "StaffOnlineResponse",
    "UserRead",
    "UserRoleUpdate",
]
