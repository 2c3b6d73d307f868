from fastapi import APIRouter

from app.api.apps import router as apps_router
from app.api.reports import router as reports_router

api_router = APIRouter()

api_router.include_router(apps_router, prefix="/apps", tags=["apps"])
api_router.include_router(reports_router, prefix="/reports", tags=["reports"])
