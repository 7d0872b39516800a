import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import models, schemas

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get("", response_model=list[schemas.Plan])
def list_plans(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return db.query(models.SubscriptionPlan).order_by(models.SubscriptionPlan.price.asc()).all()


@router.post("", response_model=schemas.Plan, status_code=201)
def create_plan(
    payload: schemas.PlanCreate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    plan = models.SubscriptionPlan(**payload.model_dump())
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


@router.put("/{plan_id}", response_model=schemas.Plan)
def update_plan(
    plan_id: uuid.UUID,
    payload: schemas.PlanUpdate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    plan = db.get(models.SubscriptionPlan, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    for key, value in payload.model_dump().items():
        setattr(plan, key, value)
    db.commit()
    db.refresh(plan)
    return plan


@router.delete("/{plan_id}")
def delete_plan(
    plan_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    plan = db.get(models.SubscriptionPlan, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    deps.delete_or_conflict(db, plan, "Plan has been issued to clients and cannot be deleted")
    return {"status": "deleted"}
