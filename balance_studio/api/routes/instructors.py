import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import models, schemas

router = APIRouter(prefix="/instructors", tags=["instructors"])


def _get_instructor(db: Session, instructor_id: uuid.UUID) -> models.Instructor:
    instructor = db.get(models.Instructor, instructor_id)
    if not instructor:
        raise HTTPException(status_code=404, detail="Instructor not found")
    return instructor


@router.get("", response_model=list[schemas.Instructor])
def list_instructors(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return db.query(models.Instructor).order_by(models.Instructor.created_at.desc()).all()


@router.post("", response_model=schemas.Instructor, status_code=201)
def create_instructor(
    payload: schemas.InstructorCreate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    instructor = models.Instructor(**payload.model_dump(), status=models.InstructorStatus.active)
    db.add(instructor)
    db.commit()
    db.refresh(instructor)
    return instructor


@router.put("/{instructor_id}", response_model=schemas.Instructor)
def update_instructor(
    instructor_id: uuid.UUID,
    payload: schemas.InstructorUpdate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    instructor = _get_instructor(db, instructor_id)
    for key, value in payload.model_dump().items():
        setattr(instructor, key, value)
    db.commit()
    db.refresh(instructor)
    return instructor


@router.delete("/{instructor_id}")
def delete_instructor(
    instructor_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    instructor = _get_instructor(db, instructor_id)
    deps.delete_or_conflict(db, instructor, "Instructor is still referenced and cannot be deleted")
    return {"status": "deleted"}
