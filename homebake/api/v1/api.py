"""API v1 router composition."""

from fastapi import APIRouter

from homebake.api.v1.endpoints import auth, batches, bread_types, dashboard, production, reports, sales, users

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(bread_types.router, prefix="/bread-types", tags=["bread-types"])
api_router.include_router(batches.router, prefix="/batches", tags=["batches"])
api_router.include_router(sales.router, prefix="/sales", tags=["sales"])
api_router.include_router(production.router, tags=["production"])
api_router.include_router(reports.router, tags=["reports"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
