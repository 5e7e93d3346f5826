"""
POST /api/storage-models/import — connect to a MySQL database, read its catalog,
persist it as a storage model.
GET  /api/storage-models        — list storage models with their tables.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.errors import ModelingError
from core.schema_importer import CatalogReader, fetch_catalog, import_storage_model
from core.serializers import serialize_storage_model
from db.database import get_session
from db.loaders import list_storage_models
from models.connection import ImportRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def get_catalog_reader() -> CatalogReader:
    return fetch_catalog


@router.get("/storage-models")
def get_storage_models(session: Session = Depends(get_session)):
    return [serialize_storage_model(m) for m in list_storage_models(session)]


@router.post("/storage-models/import", status_code=201)
def import_from_database(
    req: ImportRequest,
    session: Session = Depends(get_session),
    catalog: CatalogReader = Depends(get_catalog_reader),
):
    try:
        model = import_storage_model(session, req, catalog=catalog)
    except ModelingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception("Storage model import failed")
        raise HTTPException(status_code=500, detail=f"Storage model import failed: {e}")
    return serialize_storage_model(model)
