import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ...api import deps
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import models, schemas

router = APIRouter(prefix="/news", tags=["news"])


def _get_news(db: Session, news_id: uuid.UUID) -> models.NewsItem:
    item = db.get(models.NewsItem, news_id)
    if not item:
        raise HTTPException(status_code=404, detail="News not found")
    return item


@router.get("", response_model=list[schemas.News])
def list_news(
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    return db.query(models.NewsItem).order_by(models.NewsItem.created_at.desc()).all()


@router.post("", response_model=schemas.News, status_code=201)
def create_news(
    payload: schemas.NewsCreate,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    item = models.NewsItem(title=payload.title, content=payload.content, is_active=True)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.patch("/{news_id}", response_model=schemas.News)
def toggle_news(
    news_id: uuid.UUID,
    payload: schemas.NewsToggle,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    item = _get_news(db, news_id)
    item.is_active = payload.is_active
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{news_id}")
def delete_news(
    news_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: AuthUser = Depends(deps.get_current_admin),
):
    item = _get_news(db, news_id)
    deps.delete_or_conflict(db, item, "News item cannot be deleted")
    return {"status": "deleted"}
