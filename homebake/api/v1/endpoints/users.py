"""Staff management endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from homebake.core.security import require_roles
from homebake.db.session import get_db
from homebake.models.user import User
from homebake.schemas.user import InviteCreate, InviteRead, UserRead, UserRoleUpdate
from homebake.services.account_service import InviteError, create_invite
from homebake.services.user_service import (
    UserManagementError,
    change_role,
    delete_user,
    get_user_by_id,
    list_users,
    set_active,
)

router: APIRouter = APIRouter()


def _target_or_404(db: Session, user_id: int) -> User:
    target = get_user_by_id(db, user_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return target


@router.get("", response_model=list[UserRead], summary="List staff")
def get_users(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("owner", "manager")),
) -> list[User]:
    return list_users(db)


@router.post("/invites", response_model=InviteRead, status_code=status.HTTP_201_CREATED)
def post_invite(
    payload: InviteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("owner")),
):
    try:
        return create_invite(db, owner=current_user, role=payload.role)
    except InviteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.patch("/{user_id}/role", response_model=UserRead)
def patch_role(
    user_id: int,
    payload: UserRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("owner")),
) -> User:
    target = _target_or_404(db, user_id)
    try:
        return change_role(db, actor=current_user, target=target, new_role=payload.role)
    except UserManagementError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/{user_id}/deactivate", response_model=UserRead)
def deactivate(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("owner")),
) -> User:
    target = _target_or_404(db, user_id)
    try:
        return set_active(db, actor=current_user, target=target, is_active=False)
    except UserManagementError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/{user_id}/reactivate", response_model=UserRead)
def reactivate(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("owner")),
) -> User:
    target = _target_or_404(db, user_id)
    try:
        return set_active(db, actor=current_user, target=target, is_active=True)
    except UserManagementError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/{user_id}")
def remove_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("owner")),
) -> dict[str, str]:
    target = _target_or_404(db, user_id)
    try:
        delete_user(db, actor=current_user, target=target)
    except UserManagementError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return {"message": "User removed"}
