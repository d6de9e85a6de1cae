"""Sales endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from homebake.core.security import get_current_user, require_roles
from homebake.db.session import get_db
from homebake.models import SalesLog, User
from homebake.schemas.sales import SalesCreate, SalesRead
from homebake.services.guards import optional_shift
from homebake.services.sales_service import list_sales, record_sale

router: APIRouter = APIRouter()


@router.post("", response_model=SalesRead, status_code=status.HTTP_201_CREATED)
def post_sale(
    payload: SalesCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("sales_rep", "manager", "owner")),
) -> SalesLog:
    return record_sale(db, user=current_user, payload=payload)


@router.get("", response_model=list[SalesRead])
def get_my_sales(
    shift: str | None = Query(default=None),
    date_value: date | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[SalesLog]:
    """Return the current user's sales, optionally for one shift and civil day."""
    return list_sales(db, user=current_user, shift=optional_shift(shift), day=date_value)
