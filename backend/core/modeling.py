"""
Create and list services for every modeling aggregate.
Each create validates nothing beyond the request model: it writes the entity
(plus any join links) in one commit, then re-reads it with the relation graph
the serializer needs. Foreign references are left to the store to enforce.
"""
import logging
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import NotFoundAfterCreate, PersistenceError, driver_message
from core.serializers import serialize_dashboard
from db import loaders
from db.entities import (
    DomainFormModel,
    DomainModel,
    DomainOperationModel,
    DomainStorageTable,
    DomainViewModel,
    FormModel,
    OperationModel,
    ViewModel,
)
from models.domain import CreateDomainRequest
from models.form import CreateFormRequest
from models.operation import CreateOperationRequest
from models.view import CreateViewRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")


def persist(session: Session, entity: T, label: str) -> T:
    """Commit a new aggregate and return it re-read with all of its relations."""
    session.add(entity)
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning("Creating %s failed: %s", label, driver_message(e))
        raise PersistenceError(f"Creating {label}", driver_message(e)) from e

    detail = loaders.get_one(session, type(entity), entity.id)
    if detail is None:
        raise NotFoundAfterCreate(label[:1].upper() + label[1:])
    logger.info("Created %s %s", label, detail.id)
    return detail


# ── Creates ───────────────────────────────────────────────────────────────────

def create_view_model(session: Session, data: CreateViewRequest) -> ViewModel:
    view = ViewModel(
        name=data.name,
        description=data.description,
        storage_model_id=data.storage_model_id,
        storage_table_id=data.storage_table_id,
        layout=data.layout_document(),
    )
    return persist(session, view, "view model")


def create_form_model(session: Session, data: CreateFormRequest) -> FormModel:
    form = FormModel(
        name=data.name,
        description=data.description,
        storage_table_id=data.storage_table_id,
        schema=data.schema_document(),
    )
    return persist(session, form, "form model")


def create_operation_model(session: Session, data: CreateOperationRequest) -> OperationModel:
    operation = OperationModel(
        name=data.name,
        description=data.description,
        type=data.type,
        endpoint=data.endpoint,
        method=data.method,
        # An empty id from the form means "no reference".
        storage_model_id=data.storage_model_id or None,
        form_model_id=data.form_model_id or None,
        request_schema=data.request_schema,
        response_schema=data.response_schema,
    )
    return persist(session, operation, "operation model")


def create_domain_model(session: Session, data: CreateDomainRequest) -> DomainModel:
    domain = DomainModel(
        name=data.name,
        description=data.description or None,
        schema=data.schema_document(),
        storage_tables=[DomainStorageTable(storage_table_id=i) for i in data.storage_table_ids],
        view_models=[DomainViewModel(view_model_id=i) for i in data.view_model_ids],
        form_models=[DomainFormModel(form_model_id=i) for i in data.form_model_ids],
        operation_models=[DomainOperationModel(operation_model_id=i) for i in data.operation_model_ids],
    )
    return persist(session, domain, "domain model")


# ── Reads ─────────────────────────────────────────────────────────────────────

def load_dashboard(session: Session) -> dict:
    """Every aggregate of every type, serialized into one document."""
    return serialize_dashboard(
        storage_models=loaders.list_storage_models(session),
        view_models=loaders.list_view_models(session),
        form_models=loaders.list_form_models(session),
        operation_models=loaders.list_operation_models(session),
        domain_models=loaders.list_domain_models(session),
    )
