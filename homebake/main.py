"""FastAPI entrypoint for the HomeBake bakery management API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from homebake.api.v1.api import api_router
from homebake.core.config import settings
from homebake.db import session as db_session
from homebake.db.base import Base
from homebake.services.account_service import ensure_default_owner
from homebake.utils.time import InvalidArgument

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    if settings.jwt_secret_key.startswith("dev-only"):
        logger.warning("JWT_SECRET_KEY not set; using development fallback secret.")
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            owner_present = ensure_default_owner(session)
            logger.info("[BOOTSTRAP] owner present: %s", "yes" if owner_present else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Owner bootstrap failed; continuing startup.")


@app.exception_handler(InvalidArgument)
def invalid_argument_handler(request: Request, exc: InvalidArgument) -> JSONResponse:
    # Request parameters are validated before resolution, so this is a caller bug.
    logger.error("[SHIFT] Invalid shift window argument on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def root() -> dict[str, str]:
    return {"service": settings.app_name, "env": settings.app_env}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
