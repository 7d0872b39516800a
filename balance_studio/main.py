import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api.routes import (
    aggregators,
    attendance,
    auth,
    clients,
    dashboard,
    instructors,
    misc,
    news,
    plans,
    portal,
    profiles,
    schedule,
    settings as studio_settings,
    subscriptions,
    trials,
)
from .db.session import SessionLocal
from .config import get_settings
from .core.logging_config import setup_logging
from .services.admin import ensure_admin_exists

logger = logging.getLogger(__name__)

app = FastAPI(title="Balance Studio API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (
    auth,
    dashboard,
    clients,
    profiles,
    schedule,
    subscriptions,
    plans,
    attendance,
    instructors,
    trials,
    aggregators,
    news,
    studio_settings,
    portal,
    misc,
):
    app.include_router(module.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event() -> None:
    setup_logging()
    settings = get_settings()
    # Tables and procedures are managed by the hosted database.
    with SessionLocal() as session:
        ensure_admin_exists(session, settings.default_admin_email)
    logger.info("Balance Studio API started", extra={"env": settings.env})
