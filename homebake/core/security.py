"""Password hashing, bearer tokens and role checks for staff accounts."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from homebake.core.config import settings
from homebake.db.session import get_db
from homebake.models.user import User

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme: HTTPBearer = HTTPBearer(auto_error=True)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, role: str) -> str:
    """Sign a token naming the staff member and the role they held at login."""
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    claims: dict[str, Any] = {"sub": str(user_id), "role": role, "exp": expires_at}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def token_subject(token: str) -> int:
    """Decode a bearer token and return the user id it was issued for."""
    try:
        claims: dict[str, Any] = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise _unauthorized("Could not validate credentials") from exc

    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise _unauthorized("Invalid authentication token") from exc


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Load the signed-in staff member; deactivated accounts lose access immediately."""
    user: User | None = db.get(User, token_subject(credentials.credentials))
    if user is None or not user.is_active:
        raise _unauthorized("User not found")
    return user


def ensure_role(user: User, allowed_roles: set[str]) -> None:
    if user.role not in allowed_roles:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


def require_roles(*roles: str) -> Callable[..., User]:
    """Build a dependency that admits only the given roles."""

    allowed = {role.lower() for role in roles}

    def _checker(current_user: User = Depends(get_current_user)) -> User:
        ensure_role(current_user, allowed)
        return current_user

    return _checker
