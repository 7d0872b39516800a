from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import schemas
from ...services import subscription_service

router = APIRouter(prefix="/trials", tags=["trials"])


@router.get("", response_model=list[schemas.Trial])
def list_trials(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return subscription_service.list_trials(db)


@router.post("", response_model=schemas.Trial, status_code=201)
def register_trial(
    payload: schemas.TrialCreate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return subscription_service.register_trial(db, payload)
