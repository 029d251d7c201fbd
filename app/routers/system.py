from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db import get_db
from app.infra.logging_config import get_logger

logger = get_logger("system")

router = APIRouter(tags=["system"])


@router.get("/health", response_model=dict)
def health(db: Session = Depends(get_db)) -> dict:
    """Liveness plus a database round trip; the API stays up when the DB is down."""
    s = get_settings()
    database = "ok"
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Health check database error: %s", e)
        database = "unavailable"
    return {"status": "ok", "app": s.app_name, "database": database}
