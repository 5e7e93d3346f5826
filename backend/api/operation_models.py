"""GET/POST /api/operation-models — CRUD/custom endpoint contracts."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.errors import ModelingError
from core.modeling import create_operation_model
from core.serializers import serialize_operation_model
from db.database import get_session
from db.loaders import list_operation_models
from models.operation import CreateOperationRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/operation-models")
def get_operation_models(session: Session = Depends(get_session)):
    return [serialize_operation_model(op, include_form=True) for op in list_operation_models(session)]


@router.post("/operation-models", status_code=201)
def create_operation(req: CreateOperationRequest, session: Session = Depends(get_session)):
    try:
        operation = create_operation_model(session, req)
    except ModelingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception("Operation model creation failed")
        raise HTTPException(status_code=500, detail=f"Operation model creation failed: {e}")
    return serialize_operation_model(operation, include_form=True)
