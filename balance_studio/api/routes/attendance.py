import uuid
from datetime import date

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session
from ...api import deps
from ...core.constants import ATTENDANCE_PIN_HEADER
from ...core.security import AuthUser
from ...core.timeutils import studio_today
from ...db.session import get_db
from ...db import models, schemas
from ...services import attendance_service, rpc, schedule_service

router = APIRouter(prefix="/attendance", tags=["attendance"])


def _attendance_call(call, *args, **kwargs):
    try:
        return call(*args, **kwargs)
    except attendance_service.PastDateLocked as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except attendance_service.AttendanceNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except rpc.ProcedureError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message) from exc


@router.get("/classes", response_model=list[schemas.ScheduledClass])
def classes_for_day(
    day: date | None = None,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return schedule_service.day_classes(db, day or studio_today())


@router.get("/log", response_model=list[schemas.AttendanceRecord])
def attendance_log(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return attendance_service.recent_log(db)


@router.post("/unlock")
def unlock_archive(
    payload: schemas.PinCheck,
    _: AuthUser = Depends(deps.get_current_admin),
):
    if not attendance_service.check_pin(payload.pin):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Wrong PIN")
    return {"unlocked": True}


@router.post("/check-in", status_code=201)
def check_in(
    payload: schemas.CheckIn,
    pin: str | None = Header(default=None, alias=ATTENDANCE_PIN_HEADER),
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    _attendance_call(attendance_service.check_in, db, payload.client_id, payload.class_id, pin)
    return {"status": "visited"}


@router.delete("/{attendance_id}")
def delete_visit(
    attendance_id: uuid.UUID,
    pin: str | None = Header(default=None, alias=ATTENDANCE_PIN_HEADER),
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    record = db.get(models.AttendanceRecord, attendance_id)
    if not record:
        raise HTTPException(status_code=404, detail="Visit not found")
    _attendance_call(attendance_service.delete_visit, db, record, pin)
    return {"status": "deleted"}
