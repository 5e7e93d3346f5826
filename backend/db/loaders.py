"""
Eager-loading queries for every aggregate.
Each loader pulls exactly the relation graph the serializer expects and
returns rows newest-first by creation time.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from db.entities import (
    DomainFormModel,
    DomainModel,
    DomainOperationModel,
    DomainStorageTable,
    DomainViewModel,
    FormModel,
    OperationModel,
    StorageModel,
    StorageTable,
    ViewModel,
)


# ── Relation graphs ───────────────────────────────────────────────────────────

def storage_model_options() -> list:
    tables = selectinload(StorageModel.tables)
    return [
        tables.selectinload(StorageTable.forms).selectinload(FormModel.operations),
        tables.selectinload(StorageTable.views),
        selectinload(StorageModel.operations),
        selectinload(StorageModel.views),
    ]


def view_model_options() -> list:
    return [selectinload(ViewModel.storage_model), selectinload(ViewModel.storage_table)]


def form_model_options() -> list:
    return [selectinload(FormModel.storage_table), selectinload(FormModel.operations)]


def operation_model_options() -> list:
    return [selectinload(OperationModel.form_model), selectinload(OperationModel.storage_model)]


def domain_model_options() -> list:
    table = selectinload(DomainModel.storage_tables).selectinload(DomainStorageTable.storage_table)
    view = selectinload(DomainModel.view_models).selectinload(DomainViewModel.view_model)
    form = selectinload(DomainModel.form_models).selectinload(DomainFormModel.form_model)
    operation = selectinload(DomainModel.operation_models).selectinload(DomainOperationModel.operation_model)
    # A linked view, form or operation may also hang off another linked target;
    # whichever path reaches it first must load its back-references too.
    table_forms = table.selectinload(StorageTable.forms)
    operation_form = operation.selectinload(OperationModel.form_model)
    return [
        table_forms.selectinload(FormModel.operations).selectinload(OperationModel.form_model),
        table_forms.selectinload(FormModel.storage_table),
        table.selectinload(StorageTable.views).selectinload(ViewModel.storage_table),
        view.selectinload(ViewModel.storage_model),
        view.selectinload(ViewModel.storage_table),
        form.selectinload(FormModel.storage_table),
        form.selectinload(FormModel.operations).selectinload(OperationModel.form_model),
        operation_form.selectinload(FormModel.storage_table),
        operation_form.selectinload(FormModel.operations),
        operation.selectinload(OperationModel.storage_model),
    ]


_OPTIONS = {
    StorageModel: storage_model_options,
    ViewModel: view_model_options,
    FormModel: form_model_options,
    OperationModel: operation_model_options,
    DomainModel: domain_model_options,
}


# ── Queries ───────────────────────────────────────────────────────────────────

def list_all(session: Session, entity) -> list:
    stmt = select(entity).options(*_OPTIONS[entity]()).order_by(entity.created_at.desc(), entity.id)
    return list(session.execute(stmt).scalars().all())


def get_one(session: Session, entity, entity_id: str) -> Optional[object]:
    """Read one aggregate with its full relation graph. Callers commit first, which expires every loaded instance."""
    stmt = (
        select(entity)
        .options(*_OPTIONS[entity]())
        .where(entity.id == entity_id)
    )
    return session.execute(stmt).scalar_one_or_none()


def list_storage_models(session: Session) -> list[StorageModel]:
    return list_all(session, StorageModel)


def list_view_models(session: Session) -> list[ViewModel]:
    return list_all(session, ViewModel)


def list_form_models(session: Session) -> list[FormModel]:
    return list_all(session, FormModel)


def list_operation_models(session: Session) -> list[OperationModel]:
    return list_all(session, OperationModel)


def list_domain_models(session: Session) -> list[DomainModel]:
    return list_all(session, DomainModel)
