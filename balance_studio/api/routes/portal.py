"""Endpoints of the client self-service portal."""
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import models, schemas
from ...services import booking_service, portal_service, rpc, studio_service

router = APIRouter(prefix="/portal", tags=["portal"])


def _booking_call(call, *args, **kwargs):
    try:
        return call(*args, **kwargs)
    except booking_service.BookingNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except booking_service.CancellationClosed as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except booking_service.BookingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except rpc.ProcedureError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message) from exc


@router.get("/home", response_model=schemas.PortalHome)
def home(
    db: Session = Depends(get_db),
    client: models.Client = Depends(deps.get_current_client),
):
    return portal_service.home(db, client)


@router.get("/schedule", response_model=schemas.PortalSchedule)
def schedule(
    day: date | None = None,
    db: Session = Depends(get_db),
    client: models.Client = Depends(deps.get_current_client),
):
    selected, days, classes = _booking_call(booking_service.portal_schedule, db, client, day)
    return schemas.PortalSchedule(day=selected, days=days, classes=classes)


@router.post("/bookings", status_code=201)
def book_class(
    payload: schemas.BookingRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(deps.get_current_user),
    _: models.Client = Depends(deps.get_current_client),
):
    _booking_call(booking_service.book, db, user, payload.class_id)
    return {"status": "booked"}


@router.get("/bookings", response_model=list[schemas.MyBooking])
def my_bookings(
    db: Session = Depends(get_db),
    client: models.Client = Depends(deps.get_current_client),
):
    return booking_service.my_bookings(db, client)


@router.delete("/bookings/{attendance_id}")
def cancel_booking(
    attendance_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(deps.get_current_user),
    client: models.Client = Depends(deps.get_current_client),
):
    _booking_call(booking_service.cancel, db, user, client, attendance_id)
    return {"status": "cancelled"}


@router.get("/profile", response_model=schemas.Client)
def get_profile(client: models.Client = Depends(deps.get_current_client)):
    return client


@router.patch("/profile", response_model=schemas.Client)
def update_profile(
    payload: schemas.ClientSelfUpdate,
    db: Session = Depends(get_db),
    client: models.Client = Depends(deps.get_current_client),
):
    try:
        return portal_service.update_profile(db, client, payload)
    except portal_service.PortalError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/instructors", response_model=list[schemas.Instructor])
def instructors(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_user),
):
    return portal_service.active_instructors(db)


@router.get("/pricing", response_model=list[schemas.Plan])
def pricing(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_user),
):
    return portal_service.active_plans(db)


@router.get("/studio", response_model=schemas.StudioInfo)
def studio(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_user),
):
    return studio_service.get_studio_info(db)


@router.get("/news", response_model=list[schemas.News])
def news(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_user),
):
    return portal_service.active_news(db)


@router.post("/personal-requests", response_model=schemas.PersonalRequest, status_code=201)
def personal_request(
    payload: schemas.PersonalRequestCreate,
    db: Session = Depends(get_db),
    client: models.Client = Depends(deps.get_current_client),
):
    try:
        return portal_service.create_personal_request(db, client, payload)
    except portal_service.PortalError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
