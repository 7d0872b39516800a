import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...core.timeutils import studio_today
from ...db.session import get_db
from ...db import models, schemas
from ...services import rpc, schedule_service

router = APIRouter(prefix="/schedule", tags=["schedule"])


def _get_class(db: Session, class_id: uuid.UUID) -> models.ScheduledClass:
    scheduled = db.get(models.ScheduledClass, class_id)
    if not scheduled:
        raise HTTPException(status_code=404, detail="Class not found")
    return scheduled


@router.get("/week", response_model=schemas.WeekSchedule)
def week_schedule(
    day: date | None = None,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    try:
        monday, classes = schedule_service.week_classes(db, day or studio_today())
    except rpc.ProcedureError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message) from exc
    return schemas.WeekSchedule(week_start=monday, classes=classes)


@router.get("/day", response_model=list[schemas.ScheduledClass])
def day_schedule(
    day: date | None = None,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return schedule_service.day_classes(db, day or studio_today())


@router.get("/instructors", response_model=list[schemas.Instructor])
def schedule_instructors(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return schedule_service.active_instructors(db)


@router.post("/classes", response_model=schemas.ScheduledClass, status_code=201)
def create_class(
    payload: schemas.ClassForm,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    try:
        return schedule_service.create_class(db, payload)
    except schedule_service.ScheduleError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/classes/{class_id}", response_model=schemas.ScheduledClass)
def update_class(
    class_id: uuid.UUID,
    payload: schemas.ClassForm,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    scheduled = _get_class(db, class_id)
    try:
        return schedule_service.update_class(db, scheduled, payload)
    except schedule_service.ScheduleError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/classes/{class_id}")
def delete_class(
    class_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    scheduled = _get_class(db, class_id)
    deps.delete_or_conflict(db, scheduled, "Class is still referenced and cannot be deleted")
    return {"status": "deleted"}


@router.post("/duplicate-week", response_model=schemas.DuplicateWeekResult)
def duplicate_week(
    day: date | None = None,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    try:
        monday, next_monday = schedule_service.duplicate_week(db, day or studio_today())
    except rpc.ProcedureError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message) from exc
    return schemas.DuplicateWeekResult(source_week_start=monday, next_week_start=next_monday)
