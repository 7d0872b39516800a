from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...core.timeutils import studio_today
from ...db.session import get_db
from ...db import schemas
from ...services import aggregator_service, schedule_service

router = APIRouter(prefix="/aggregators", tags=["aggregators"])


@router.get("", response_model=schemas.AggregatorVisitList)
def list_visits(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    visits = aggregator_service.list_visits(db)
    return schemas.AggregatorVisitList(
        total_revenue=aggregator_service.total_revenue(visits),
        visits=visits,
    )


@router.get("/classes", response_model=list[schemas.ScheduledClass])
def today_classes(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return schedule_service.day_classes(db, studio_today())


@router.get("/summary", response_model=list[schemas.AggregatorMonthSummary])
def monthly_summary(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    try:
        return aggregator_service.monthly_summary(db, year, month)
    except aggregator_service.AggregatorError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("", response_model=schemas.AggregatorVisit, status_code=201)
def record_visit(
    payload: schemas.AggregatorVisitCreate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    try:
        return aggregator_service.record_visit(db, payload)
    except aggregator_service.AggregatorError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
