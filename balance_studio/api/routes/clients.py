import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from ...api import deps
from ...core.constants import CLIENT_SEARCH_MIN_LENGTH
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import models, schemas
from ...services import client_service

router = APIRouter(prefix="/clients", tags=["clients"])


def _get_client(db: Session, client_id: uuid.UUID) -> models.Client:
    client = db.get(models.Client, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.get("", response_model=list[schemas.Client])
def list_clients(
    q: str | None = None,
    status: models.ClientStatus | None = None,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return client_service.list_clients(db, q=q, status=status)


@router.get("/search", response_model=list[schemas.Client])
def search_clients(
    q: str = Query(..., min_length=CLIENT_SEARCH_MIN_LENGTH, description="Part of the first or last name"),
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return client_service.search_clients(db, q)


@router.get("/active", response_model=list[schemas.ClientShort])
def list_active_clients(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return client_service.active_clients(db)


@router.post("", response_model=schemas.Client, status_code=201)
def create_client(
    payload: schemas.ClientCreate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return client_service.create_client(db, payload)


@router.get("/{client_id}", response_model=schemas.Client)
def get_client(
    client_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return _get_client(db, client_id)


@router.patch("/{client_id}", response_model=schemas.Client)
def update_client(
    client_id: uuid.UUID,
    payload: schemas.ClientUpdate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    client = _get_client(db, client_id)
    try:
        return client_service.update_client(db, client, payload)
    except client_service.ClientError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/{client_id}/status", response_model=schemas.Client)
def set_client_status(
    client_id: uuid.UUID,
    payload: schemas.ClientStatusUpdate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    client = _get_client(db, client_id)
    return client_service.set_status(db, client, payload.status)


@router.get("/{client_id}/subscriptions", response_model=list[schemas.Subscription])
def list_client_subscriptions(
    client_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    client = _get_client(db, client_id)
    return client_service.client_subscriptions(db, client)


@router.delete("/{client_id}")
def delete_client(
    client_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    client = _get_client(db, client_id)
    deps.delete_or_conflict(db, client, "Client is still referenced and cannot be deleted")
    return {"status": "deleted"}
