from sqlalchemy.orm import Session

from ..db import models, schemas


def get_studio_info(db: Session) -> schemas.StudioInfo:
    info = db.get(models.StudioInfo, models.STUDIO_INFO_ID)
    if info is None:
        return schemas.StudioInfo()
    defaults = schemas.StudioInfo()
    return schemas.StudioInfo(
        name=info.name or defaults.name,
        description=info.description or "",
        address=info.address or "",
        phone=info.phone or "",
        instagram=info.instagram or "",
    )


def update_studio_info(db: Session, payload: schemas.StudioInfo) -> schemas.StudioInfo:
    info = db.get(models.StudioInfo, models.STUDIO_INFO_ID)
    if info is None:
        info = models.StudioInfo(id=models.STUDIO_INFO_ID)
        db.add(info)
    for key, value in payload.model_dump().items():
        setattr(info, key, value)
    db.commit()
    return get_studio_info(db)
