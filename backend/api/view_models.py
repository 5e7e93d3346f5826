"""GET/POST /api/view-models — display views over one storage table."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.errors import ModelingError
from core.modeling import create_view_model
from core.serializers import serialize_view_model
from db.database import get_session
from db.loaders import list_view_models
from models.view import CreateViewRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/view-models")
def get_view_models(session: Session = Depends(get_session)):
    return [serialize_view_model(v) for v in list_view_models(session)]


@router.post("/view-models", status_code=201)
def create_view(req: CreateViewRequest, session: Session = Depends(get_session)):
    try:
        view = create_view_model(session, req)
    except ModelingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception("View model creation failed")
        raise HTTPException(status_code=500, detail=f"View model creation failed: {e}")
    return serialize_view_model(view)
