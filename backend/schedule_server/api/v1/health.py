import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from schedule_server.core.config import settings
from schedule_server.db import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", summary="Health check")
def read_health() -> dict[str, str]:
    """Return basic service health information."""
    return {"status": "ok"}


@router.get("/ready", summary="Readiness check")
def read_ready(session: SessionDep):
    """Check that the database answers before taking traffic."""
    try:
        session.connection().execute(text("SELECT 1"))
        return {"status": "ready", "database": "connected"}
    except SQLAlchemyError as exc:
        logger.error(f"Readiness check failed: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "database": "disconnected",
                "error": str(exc)
                if settings.ENVIRONMENT != "production"
                else "Database connection failed",
            },
        )
