"""Authentication endpoints (API JWT)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from homebake.core.security import create_access_token, get_current_user
from homebake.db.session import get_db
from homebake.models.user import User
from homebake.schemas.auth import LoginRequest, SignupRequest, TokenResponse
from homebake.schemas.user import UserRead
from homebake.services.account_service import InviteError, redeem_invite
from homebake.services.user_service import authenticate_user

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    user: User | None = authenticate_user(db, payload.email, payload.password)
    if user is None:
        logger.info("[AUTH] Failed login for %s", payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    return TokenResponse(access_token=create_access_token(user.id, user.role))


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(get_db)) -> UserRead:
    try:
        user = redeem_invite(
            db,
            token=payload.token,
            name=payload.name,
            email=payload.email,
            password=payload.password,
        )
    except InviteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return UserRead.model_validate(user)


@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)
