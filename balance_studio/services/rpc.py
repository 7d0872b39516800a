"""Gateway to the stored procedures of the hosted database.

Capacity checks, session balances and double-booking protection live inside
these procedures; this module only invokes them by name and turns backend
errors into :class:`ProcedureError`.
"""
from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

REGISTER_VISIT = "register_visit"
CLIENT_BOOK_CLASS = "client_book_class"
CLIENT_CANCEL_BOOKING = "client_cancel_booking"
GET_CLASSES_WITH_OCCUPANCY = "get_classes_with_occupancy"
DUPLICATE_WEEK_SCHEDULE = "duplicate_week_schedule"

PROCEDURES = frozenset(
    {
        REGISTER_VISIT,
        CLIENT_BOOK_CLASS,
        CLIENT_CANCEL_BOOKING,
        GET_CLASSES_WITH_OCCUPANCY,
        DUPLICATE_WEEK_SCHEDULE,
    }
)


class ProcedureError(Exception):
    def __init__(self, procedure: str, message: str) -> None:
        super().__init__(message)
        self.procedure = procedure
        self.message = message


def backend_message(exc: DBAPIError) -> str:
    """Return the message raised inside the procedure, without driver noise."""
    orig = exc.orig
    diag = getattr(orig, "diag", None)
    primary = getattr(diag, "message_primary", None)
    if primary:
        return str(primary)
    raw = str(orig if orig is not None else exc).strip()
    first_line = raw.splitlines()[0] if raw else ""
    if first_line.startswith("ERROR:"):
        first_line = first_line[len("ERROR:"):].strip()
    return first_line or "Database procedure failed"


def build_statement(name: str, params: Mapping[str, Any]) -> str:
    if name not in PROCEDURES:
        raise ValueError(f"Unknown procedure: {name}")
    arguments = ", ".join(f"{key} => :{key}" for key in params)
    return f"SELECT * FROM {name}({arguments})"


def _bind_value(value: Any) -> Any:
    if isinstance(value, (datetime, date, str, int, float)) or value is None:
        return value
    return str(value)


def _impersonate(db: Session, claims: Mapping[str, Any]) -> None:
    # Procedures read the caller through auth.uid(), which looks at these
    # transaction-local settings.
    db.execute(
        text("SELECT set_config('request.jwt.claims', :claims, true)"),
        {"claims": json.dumps(dict(claims), default=str)},
    )
    db.execute(
        text("SELECT set_config('request.jwt.claim.sub', :sub, true)"),
        {"sub": str(claims.get("sub", ""))},
    )


def call_procedure(
    db: Session,
    name: str,
    params: Mapping[str, Any],
    *,
    claims: Mapping[str, Any] | None = None,
) -> list[dict[str, Any]]:
    statement = text(build_statement(name, params))
    bound = {key: _bind_value(value) for key, value in params.items()}
    try:
        if claims is not None:
            _impersonate(db, claims)
        result = db.execute(statement, bound)
        rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
        db.commit()
    except DBAPIError as exc:
        db.rollback()
        message = backend_message(exc)
        logger.warning(
            "Procedure %s failed: %s", name, message, extra={"procedure": name}
        )
        raise ProcedureError(name, message) from exc
    logger.info("Procedure %s completed", name, extra={"procedure": name, "rows": len(rows)})
    return rows


def register_visit(db: Session, client_id: Any, class_id: Any) -> list[dict[str, Any]]:
    return call_procedure(
        db, REGISTER_VISIT, {"p_client_id": client_id, "p_class_id": class_id}
    )


def client_book_class(db: Session, class_id: Any, claims: Mapping[str, Any]) -> list[dict[str, Any]]:
    return call_procedure(db, CLIENT_BOOK_CLASS, {"p_class_id": class_id}, claims=claims)


def client_cancel_booking(
    db: Session, attendance_id: Any, claims: Mapping[str, Any]
) -> list[dict[str, Any]]:
    return call_procedure(
        db, CLIENT_CANCEL_BOOKING, {"p_attendance_id": attendance_id}, claims=claims
    )


def get_classes_with_occupancy(
    db: Session, start_range: datetime, end_range: datetime
) -> list[dict[str, Any]]:
    return call_procedure(
        db,
        GET_CLASSES_WITH_OCCUPANCY,
        {"start_range": start_range, "end_range": end_range},
    )


def duplicate_week_schedule(db: Session, start_date: date) -> list[dict[str, Any]]:
    return call_procedure(
        db, DUPLICATE_WEEK_SCHEDULE, {"start_date": start_date.isoformat()}
    )


__all__ = [
    "ProcedureError",
    "PROCEDURES",
    "backend_message",
    "build_statement",
    "call_procedure",
    "register_visit",
    "client_book_class",
    "client_cancel_booking",
    "get_classes_with_occupancy",
    "duplicate_week_schedule",
]
