"""Bread catalogue endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from homebake.core.security import get_current_user, require_roles
from homebake.db.session import get_db
from homebake.models import ArchivedBatch, Batch, BreadType, RemainingBread, SalesLog, User
from homebake.schemas.bread_type import BreadTypeCreate, BreadTypeRead, BreadTypeUpdate
from homebake.services.batch_service import get_bread_type_or_404

router: APIRouter = APIRouter()


@router.get("", response_model=list[BreadTypeRead])
def list_bread_types(
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> list[BreadType]:
    return list(db.scalars(select(BreadType).order_by(BreadType.name)).all())


@router.post("", response_model=BreadTypeRead, status_code=status.HTTP_201_CREATED)
def create_bread_type(
    payload: BreadTypeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("owner", "manager")),
) -> BreadType:
    bread_type = BreadType(**payload.model_dump(), created_by=current_user.id)
    db.add(bread_type)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Bread type already exists") from exc
    db.refresh(bread_type)
    return bread_type


@router.put("/{bread_type_id}", response_model=BreadTypeRead)
def update_bread_type(
    bread_type_id: int,
    payload: BreadTypeUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("owner", "manager")),
) -> BreadType:
    bread_type = get_bread_type_or_404(db, bread_type_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(bread_type, field, value)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Bread type already exists") from exc
    db.refresh(bread_type)
    return bread_type


@router.delete("/{bread_type_id}")
def delete_bread_type(
    bread_type_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("owner", "manager")),
) -> dict[str, str]:
    bread_type = get_bread_type_or_404(db, bread_type_id)
    for model in (Batch, ArchivedBatch, SalesLog, RemainingBread):
        if db.scalar(select(model.id).where(model.bread_type_id == bread_type_id).limit(1)) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Bread type has production or sales records and cannot be removed.",
            )
    db.delete(bread_type)
    db.commit()
    return {"message": "Bread type removed"}
