from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from b2b_app.database.connection import get_db
from b2b_app.dependencies.auth import require_admin
from b2b_app.schemas.settings import AppSettingsResponse, AppSettingsUpdate, DashboardStats
from b2b_app.services.settings_service import (
    get_app_settings,
    get_dashboard_stats,
    update_app_settings,
)

router = APIRouter(tags=["Settings & Dashboard"], dependencies=[Depends(require_admin)])


@router.get("/settings", response_model=AppSettingsResponse)
def read_settings(db: Session = Depends(get_db)):
    return get_app_settings(db)


@router.post("/settings", response_model=AppSettingsResponse)
def write_settings(data: AppSettingsUpdate, db: Session = Depends(get_db)):
    return update_app_settings(db, data)


@router.get("/stats", response_model=DashboardStats)
def stats(db: Session = Depends(get_db)):
    return get_dashboard_stats(db)
