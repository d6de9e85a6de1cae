"""Staff account operations."""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from homebake.core.security import verify_password
from homebake.models import ActivityLog, Batch, SalesLog, ShiftReport, User
from homebake.models.user import USER_ROLES, normalize_user_role
from homebake.services.activity_service import log_activity

logger = logging.getLogger(__name__)


class UserManagementError(Exception):
    """Raised when an owner action on a staff account is not allowed."""


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email.strip().lower()).limit(1))


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def list_users(db: Session, include_inactive: bool = True) -> list[User]:
    query = select(User).order_by(User.name.asc(), User.id.asc())
    if not include_inactive:
        query = query.where(User.is_active.is_(True))
    return list(db.scalars(query).all())


def create_user(
    db: Session,
    name: str,
    email: str,
    hashed_password: str,
    role: str,
    created_by: int | None = None,
) -> User:
    user = User(
        name=name.strip(),
        email=email.strip().lower(),
        password_hash=hashed_password,
        role=normalize_user_role(role),
        created_by=created_by,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user


def _managed_target(actor: User, target: User) -> None:
    if target.role == "owner":
        raise UserManagementError("Owner accounts cannot be modified")
    if target.id == actor.id:
        raise UserManagementError("You cannot modify your own account")


def change_role(db: Session, *, actor: User, target: User, new_role: str) -> User:
    """Move a manager or sales representative to another staff role."""
    try:
        role = normalize_user_role(new_role)
    except ValueError as exc:
        raise UserManagementError("Invalid role specified") from exc
    if target.role == "owner":
        raise UserManagementError("Cannot change owner role")
    if role == "owner":
        raise UserManagementError("Cannot assign owner role to other users")
    if role == target.role:
        raise UserManagementError("User already has this role")

    old_role = target.role
    target.role = role
    log_activity(
        db,
        actor=actor,
        action_type="staff_role_changed",
        details={"user_id": target.id, "name": target.name, "old_role": old_role, "new_role": role},
    )
    db.commit()
    db.refresh(target)
    logger.info("[USERS] Role changed for user_id=%s: %s -> %s", target.id, old_role, role)
    return target


def set_active(db: Session, *, actor: User, target: User, is_active: bool) -> User:
    _managed_target(actor, target)
    target.is_active = is_active
    log_activity(
        db,
        actor=actor,
        action_type="staff_reactivated" if is_active else "staff_deactivated",
        details={"user_id": target.id, "name": target.name, "role": target.role},
    )
    db.commit()
    db.refresh(target)
    logger.info("[USERS] user_id=%s active=%s", target.id, is_active)
    return target


def delete_user(db: Session, *, actor: User, target: User) -> None:
    """Remove a staff account that has no recorded production, sales or reports."""
    _managed_target(actor, target)
    for model, column in ((Batch, Batch.created_by), (SalesLog, SalesLog.recorded_by), (ShiftReport, ShiftReport.user_id)):
        if db.scalar(select(model.id).where(column == target.id).limit(1)) is not None:
            raise UserManagementError("User has recorded history; deactivate the account instead")

    db.query(ActivityLog).filter(ActivityLog.actor_user_id == target.id).update({ActivityLog.actor_user_id: None})
    log_activity(
        db,
        actor=actor,
        action_type="staff_deleted",
        details={"user_id": target.id, "name": target.name, "role": target.role},
    )
    db.delete(target)
    db.commit()
    logger.info("[USERS] Deleted user_id=%s", target.id)


def staff_online(db: Session, *, now: datetime, window_minutes: int) -> tuple[int, int, dict[str, int]]:
    """Count active staff who signed in within the last ``window_minutes``."""
    since = now - timedelta(minutes=window_minutes)
    active_users = list_users(db, include_inactive=False)
    online = [
        user
        for user in active_users
        if user.last_login_at is not None and _as_utc(user.last_login_at) >= since
    ]
    by_role = {role: sum(1 for user in online if user.role == role) for role in USER_ROLES}
    return len(online), len(active_users), by_role


def _as_utc(value: datetime) -> datetime:
    # sqlite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
