"""GET /api/health — store reachability check."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import driver_message
from db.database import get_session, ping

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check(session: Session = Depends(get_session)):
    store_status = _check_store(session)
    return {
        "status": "ok" if store_status["status"] == "up" else "degraded",
        "services": {"store": store_status},
    }


def _check_store(session: Session) -> dict:
    try:
        ping(session)
        return {"status": "up", "dialect": session.get_bind().dialect.name}
    except SQLAlchemyError as e:
        logger.warning("Store health check failed: %s", driver_message(e))
        return {"status": "down", "error": driver_message(e)}
