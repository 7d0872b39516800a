from datetime import time, timedelta
from sqlalchemy.orm import Session
from ..db.session import SessionLocal
from ..db import models
from ..config import get_settings
from ..core.constants import DEFAULT_ROOM, DEFAULT_STUDIO_NAME
from ..core.timeutils import studio_today
from .admin import ensure_admin_exists
from .schedule_service import class_times


def seed(session: Session) -> None:
    settings = get_settings()
    ensure_admin_exists(session, settings.default_admin_email)
    if session.get(models.StudioInfo, models.STUDIO_INFO_ID) is None:
        session.add(
            models.StudioInfo(
                id=models.STUDIO_INFO_ID,
                name=DEFAULT_STUDIO_NAME,
                description="Студия йоги",
            )
        )
    if session.query(models.Instructor).count() == 0:
        instructor = models.Instructor(
            first_name="Алия",
            last_name="Серикова",
            specialization=["Хатха", "Стретчинг"],
        )
        session.add(instructor)
        session.flush()
        start, end = class_times(studio_today() + timedelta(days=1), time(hour=19), 60)
        session.add(
            models.ScheduledClass(
                name="Хатха йога",
                start_time=start,
                end_time=end,
                instructor_id=instructor.id,
                max_capacity=10,
                room=DEFAULT_ROOM,
            )
        )
    if session.query(models.SubscriptionPlan).count() == 0:
        session.add(
            models.SubscriptionPlan(
                name="8 занятий",
                price=24000,
                sessions_count=8,
                duration_days=30,
                description="Действует 30 дней",
                features=["Коврик бесплатно", "Заморозка 7 дней"],
            )
        )
    session.commit()


if __name__ == "__main__":
    with SessionLocal() as session:
        seed(session)
        print("Seed data created")
