"""Owner bootstrap and invite-based staff signup."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from homebake.core.config import settings
from homebake.core.security import get_password_hash
from homebake.models import Invite, User
from homebake.models.user import INVITABLE_ROLES, normalize_user_role
from homebake.services.activity_service import log_activity
from homebake.services.user_service import create_user, get_user_by_email

logger = logging.getLogger(__name__)


class InviteError(Exception):
    """Raised when an invite cannot be created or redeemed."""


def ensure_default_owner(db: Session) -> bool:
    """Ensure the configured owner account exists and is active.

    Returns:
        bool: True when an owner account is present after this call.
    """
    if not settings.owner_email or not settings.owner_password:
        existing_owner = db.scalar(select(User.id).where(User.role == "owner").limit(1))
        if existing_owner is None:
            logger.warning("[BOOTSTRAP] OWNER_EMAIL/OWNER_PASSWORD not set and no owner account exists.")
        return existing_owner is not None

    existing = get_user_by_email(db, settings.owner_email)
    if existing is not None:
        if existing.role != "owner":
            logger.warning("[BOOTSTRAP] %s exists with role=%s; leaving it untouched.", existing.email, existing.role)
            return db.scalar(select(User.id).where(User.role == "owner").limit(1)) is not None
        if not existing.is_active:
            existing.is_active = True
            db.commit()
            logger.info("[BOOTSTRAP] Owner exists but was inactive; account re-activated.")
        return True

    create_user(
        db,
        name=settings.owner_name,
        email=settings.owner_email,
        hashed_password=get_password_hash(settings.owner_password),
        role="owner",
    )
    logger.info("[BOOTSTRAP] Owner account created for %s", settings.owner_email)
    return True


def create_invite(db: Session, *, owner: User, role: str, now: datetime | None = None) -> Invite:
    try:
        canonical_role = normalize_user_role(role)
    except ValueError as exc:
        raise InviteError(str(exc)) from exc
    if canonical_role not in INVITABLE_ROLES:
        raise InviteError("Invites can only be issued for managers and sales representatives")

    issued_at = now or datetime.now(timezone.utc)
    invite = Invite(
        token=secrets.token_urlsafe(24),
        role=canonical_role,
        expires_at=issued_at + timedelta(hours=settings.invite_expire_hours),
        created_by=owner.id,
    )
    db.add(invite)
    db.commit()
    db.refresh(invite)
    logger.info("[INVITE] %s invite issued by user_id=%s", canonical_role, owner.id)
    return invite


def redeem_invite(
    db: Session,
    *,
    token: str,
    name: str,
    email: str,
    password: str,
    now: datetime | None = None,
) -> User:
    """Create a staff account from a valid, unused invite token."""
    invite = db.scalar(select(Invite).where(Invite.token == token).limit(1))
    if invite is None:
        raise InviteError("Invalid invite token")
    if invite.is_used:
        raise InviteError("Invite has already been used")
    expires_at = invite.expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if (now or datetime.now(timezone.utc)) >= expires_at:
        raise InviteError("Invite has expired")
    if get_user_by_email(db, email) is not None:
        raise InviteError("Email already registered")

    invite.is_used = True
    user = create_user(
        db,
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        role=invite.role,
        created_by=invite.created_by,
    )
    log_activity(db, actor=user, action_type="staff_joined", details={"role": user.role})
    db.commit()
    logger.info("[INVITE] user_id=%s joined as %s", user.id, user.role)
    return user
