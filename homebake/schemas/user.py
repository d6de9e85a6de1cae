"""Staff account and invite schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: str
    is_active: bool
    created_at: datetime
    last_login_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserRoleUpdate(BaseModel):
    role: str


class InviteCreate(BaseModel):
    role: str


class InviteRead(BaseModel):
    id: int
    token: str
    role: str
    is_used: bool
    expires_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StaffOnlineResponse(BaseModel):
    """Counts of staff seen recently versus all active staff."""

    online: int
    total: int
    by_role: dict[str, int]
    timestamp: datetime
