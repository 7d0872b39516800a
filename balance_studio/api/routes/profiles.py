import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import models, schemas
from ...services import subscription_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _get_profile(db: Session, profile_id: uuid.UUID) -> models.Profile:
    profile = db.get(models.Profile, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.get("/{profile_id}", response_model=schemas.Profile)
def get_profile(
    profile_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return _get_profile(db, profile_id)


@router.get("/{profile_id}/subscriptions", response_model=list[schemas.UserSubscription])
def list_profile_subscriptions(
    profile_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    profile = _get_profile(db, profile_id)
    return subscription_service.profile_subscriptions(db, profile)


@router.post("/{profile_id}/subscriptions", response_model=schemas.UserSubscription, status_code=201)
def issue_plan(
    profile_id: uuid.UUID,
    payload: schemas.PlanIssue,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    profile = _get_profile(db, profile_id)
    try:
        return subscription_service.issue_plan(db, profile, payload)
    except subscription_service.SubscriptionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
