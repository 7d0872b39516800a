from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...core.timeutils import studio_today
from ...db.session import get_db
from ...db import schemas
from ...services import dashboard_service, schedule_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=schemas.Dashboard)
def dashboard(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return schemas.Dashboard(
        stats=schemas.DashboardStats(**dashboard_service.collect_stats(db)),
        today_classes=schedule_service.day_classes(db, studio_today()),
    )
