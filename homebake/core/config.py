"""Application configuration."""

from datetime import time
from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "HomeBake API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./homebake.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    owner_email: str = getenv("OWNER_EMAIL", "")
    owner_password: str = getenv("OWNER_PASSWORD", "")
    owner_name: str = getenv("OWNER_NAME", "Owner")
    invite_expire_hours: int = int(getenv("INVITE_EXPIRE_HOURS", "24"))
    staff_online_minutes: int = int(getenv("STAFF_ONLINE_MINUTES", "15"))
    morning_shift_start: time = time.fromisoformat(getenv("MORNING_SHIFT_START", "10:00"))
    night_shift_start: time = time.fromisoformat(getenv("NIGHT_SHIFT_START", "22:00"))


settings: Settings = Settings()
