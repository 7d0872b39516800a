from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import schemas
from ...services import studio_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/studio", response_model=schemas.StudioInfo)
def get_studio_info(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return studio_service.get_studio_info(db)


@router.put("/studio", response_model=schemas.StudioInfo)
def update_studio_info(
    payload: schemas.StudioInfo,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return studio_service.update_studio_info(db, payload)
