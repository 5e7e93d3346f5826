"""GET/POST /api/form-models — submission forms over one storage table."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.errors import ModelingError
from core.modeling import create_form_model
from core.serializers import serialize_form_model
from db.database import get_session
from db.loaders import list_form_models
from models.form import FORM_COMPONENTS, CreateFormRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/form-models")
def get_form_models(session: Session = Depends(get_session)):
    return [serialize_form_model(f, include_operations=True) for f in list_form_models(session)]


@router.get("/form-models/components")
def get_form_components():
    return {"components": list(FORM_COMPONENTS)}


@router.post("/form-models", status_code=201)
def create_form(req: CreateFormRequest, session: Session = Depends(get_session)):
    try:
        form = create_form_model(session, req)
    except ModelingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception("Form model creation failed")
        raise HTTPException(status_code=500, detail=f"Form model creation failed: {e}")
    return serialize_form_model(form, include_operations=True)
