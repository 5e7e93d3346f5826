"""GET /api/dashboard — every model of every type in one payload."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.modeling import load_dashboard
from db.database import get_session

router = APIRouter()


@router.get("/dashboard")
def get_dashboard(session: Session = Depends(get_session)):
    return load_dashboard(session)
