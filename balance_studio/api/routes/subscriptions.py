import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import models, schemas
from ...services import subscription_service

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get("", response_model=list[schemas.Subscription])
def list_subscriptions(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return subscription_service.list_subscriptions(db)


@router.post("", response_model=schemas.Subscription, status_code=201)
def create_subscription(
    payload: schemas.SubscriptionForm,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    try:
        return subscription_service.create_subscription(db, payload)
    except subscription_service.SubscriptionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/{subscription_id}", response_model=schemas.Subscription)
def update_subscription(
    subscription_id: uuid.UUID,
    payload: schemas.SubscriptionForm,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    subscription = db.get(models.Subscription, subscription_id)
    if not subscription:
        raise HTTPException(status_code=404, detail="Subscription not found")
    try:
        return subscription_service.update_subscription(db, subscription, payload)
    except subscription_service.SubscriptionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{subscription_id}")
def delete_subscription(
    subscription_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    subscription = db.get(models.Subscription, subscription_id)
    if not subscription:
        raise HTTPException(status_code=404, detail="Subscription not found")
    deps.delete_or_conflict(db, subscription, "Subscription is still referenced and cannot be deleted")
    return {"status": "deleted"}
