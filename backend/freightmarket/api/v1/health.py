"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from freightmarket.api.deps import get_session, json_response, timing

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return liveness plus a database round-trip status."""

    db_status = "ok"
    try:
        get_session().execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    version = current_app.config.get("APP_VERSION", "dev")
    payload = {
        "status": "ok" if db_status == "ok" else "degraded",
        "db": db_status,
        "version": version,
    }
    return json_response(payload, status=200 if db_status == "ok" else 503)
