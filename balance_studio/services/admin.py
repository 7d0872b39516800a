import logging
from sqlalchemy.orm import Session

from ..db import models

logger = logging.getLogger(__name__)


def is_admin(session: Session, email: str | None) -> bool:
    if not email:
        return False
    return (
        session.query(models.AppAdmin.id).filter(models.AppAdmin.email == email).first()
        is not None
    )


def ensure_admin_exists(session: Session, email: str) -> None:
    email = email.strip()
    if not email:
        return
    if is_admin(session, email):
        logger.info("Admin '%s' already on the allow-list", email)
        return
    session.add(models.AppAdmin(email=email))
    session.commit()
    logger.info("Added '%s' to the admin allow-list", email)
