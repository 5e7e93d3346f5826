"""GET/POST /api/domain-models — business field bundles linked to other models."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.errors import ModelingError
from core.modeling import create_domain_model
from core.serializers import serialize_domain_model
from db.database import get_session
from db.loaders import list_domain_models
from models.domain import CreateDomainRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/domain-models")
def get_domain_models(session: Session = Depends(get_session)):
    return [serialize_domain_model(d) for d in list_domain_models(session)]


@router.post("/domain-models", status_code=201)
def create_domain(req: CreateDomainRequest, session: Session = Depends(get_session)):
    try:
        domain = create_domain_model(session, req)
    except ModelingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception("Domain model creation failed")
        raise HTTPException(status_code=500, detail=f"Domain model creation failed: {e}")
    return serialize_domain_model(domain)
