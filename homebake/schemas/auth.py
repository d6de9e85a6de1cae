"""Authentication-related request and response schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Payload for user login."""

    email: str
    password: str


class SignupRequest(BaseModel):
    """Payload for invite-based staff signup."""

    token: str
    name: str = Field(min_length=1, max_length=255)
    email: str
    password: str = Field(min_length=6)


class TokenResponse(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"
