"""
Relational serializer — flattens loaded aggregates into the nested camelCase
documents the dashboard client consumes.

Back-references (a view's or form's table, an operation's form) are always
rendered shallow, so Table -> Form -> Table never recurses. Relations that
were not eagerly loaded count as absent: collections become [] and single
references are left out. Nothing here triggers a lazy load.
"""
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable


# ── Helpers ───────────────────────────────────────────────────────────────────

def iso(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 in UTC with a trailing Z; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _loaded(obj: Any, attr: str) -> bool:
    try:
        state = inspect(obj)
    except NoInspectionAvailable:
        return hasattr(obj, attr)
    return attr not in state.unloaded


def _related(obj: Any, attr: str) -> Any:
    return getattr(obj, attr) if _loaded(obj, attr) else None


def _collection(obj: Any, attr: str) -> list:
    return list(_related(obj, attr) or [])


def _timestamps(obj: Any) -> dict:
    return {"createdAt": iso(obj.created_at), "updatedAt": iso(obj.updated_at)}


# ── Per-entity ────────────────────────────────────────────────────────────────

def serialize_operation_model(operation: Any, include_form: bool = False) -> dict:
    doc = {
        "id": operation.id,
        "name": operation.name,
        "description": operation.description,
        "type": operation.type,
        "endpoint": operation.endpoint,
        "method": operation.method,
        "storageModelId": operation.storage_model_id,
        "formModelId": operation.form_model_id,
        "requestSchema": operation.request_schema,
        "responseSchema": operation.response_schema,
        **_timestamps(operation),
    }
    if include_form:
        form = _related(operation, "form_model")
        if form is not None:
            doc["formModel"] = serialize_form_model(form, include_operations=False, include_table=False)
    return doc


def serialize_form_model(form: Any, include_operations: bool = False, include_table: bool = True) -> dict:
    doc = {
        "id": form.id,
        "name": form.name,
        "description": form.description,
        "schema": form.schema,
        "storageTableId": form.storage_table_id,
        **_timestamps(form),
    }
    if include_operations and _loaded(form, "operations"):
        doc["operations"] = [
            serialize_operation_model(op, include_form=False) for op in _collection(form, "operations")
        ]
    if include_table:
        table = _related(form, "storage_table")
        if table is not None:
            doc["storageTable"] = serialize_storage_table(table, deep=False)
    return doc


def serialize_view_model(view: Any, include_table: bool = True) -> dict:
    doc = {
        "id": view.id,
        "name": view.name,
        "description": view.description,
        "layout": view.layout,
        "storageModelId": view.storage_model_id,
        "storageTableId": view.storage_table_id,
        **_timestamps(view),
    }
    if include_table:
        table = _related(view, "storage_table")
        if table is not None:
            doc["storageTable"] = serialize_storage_table(table, deep=False)
    return doc


def serialize_storage_table(table: Any, deep: bool = True) -> dict:
    """`deep=False` is used for back-references: forms and views come out empty."""
    forms: list[dict] = []
    views: list[dict] = []
    if deep:
        forms = [
            serialize_form_model(f, include_operations=True, include_table=False)
            for f in _collection(table, "forms")
        ]
        views = [serialize_view_model(v, include_table=False) for v in _collection(table, "views")]
    return {
        "id": table.id,
        "name": table.name,
        "description": table.description,
        "schema": table.schema,
        "storageModelId": table.storage_model_id,
        **_timestamps(table),
        "forms": forms,
        "views": views,
    }


def serialize_storage_model(model: Any) -> dict:
    return {
        "id": model.id,
        "name": model.name,
        "description": model.description,
        "database": model.database,
        "connection": model.connection,
        "schema": model.schema,
        **_timestamps(model),
        "tables": [serialize_storage_table(t, deep=True) for t in _collection(model, "tables")],
        "operations": [
            serialize_operation_model(op, include_form=False) for op in _collection(model, "operations")
        ],
        "views": [serialize_view_model(v, include_table=False) for v in _collection(model, "views")],
    }


# ── Domain models ─────────────────────────────────────────────────────────────

def _first_str(record: Mapping, *keys: str) -> Optional[str]:
    for key in keys:
        value = record.get(key)
        if isinstance(value, str):
            return value
    return None


def extract_domain_fields(schema: Any) -> list[dict]:
    """
    Pull business fields out of a free-form domain schema document.

    Accepts `key` or legacy `column` as the identifier and `name` or legacy
    `label` as the display name; entries lacking either are dropped.
    `type` falls back to `dataType`. `required` is kept only when boolean and
    `description` only when it is a string or an explicit null.
    """
    if not isinstance(schema, Mapping):
        return []
    fields = schema.get("fields")
    if not isinstance(fields, list):
        return []

    result = []
    for item in fields:
        if not isinstance(item, Mapping):
            continue
        key = _first_str(item, "key", "column")
        name = _first_str(item, "name", "label")
        if not key or not name:
            continue

        field: dict[str, Any] = {"key": key, "name": name}
        type_ = _first_str(item, "type", "dataType")
        if type_ is not None:
            field["type"] = type_
        if isinstance(item.get("required"), bool):
            field["required"] = item["required"]
        if "description" in item and (item["description"] is None or isinstance(item["description"], str)):
            field["description"] = item["description"]
        result.append(field)
    return result


def _link_targets(domain: Any, links_attr: str, target_attr: str) -> list:
    targets = []
    for link in _collection(domain, links_attr):
        target = _related(link, target_attr)
        if target is not None:
            targets.append(target)
    return targets


def serialize_domain_model(domain: Any) -> dict:
    fields = extract_domain_fields(domain.schema)
    return {
        "id": domain.id,
        "name": domain.name,
        "description": domain.description,
        "schema": {"fields": fields} if domain.schema is not None else None,
        "fields": fields,
        "storageTables": [
            serialize_storage_table(t, deep=True)
            for t in _link_targets(domain, "storage_tables", "storage_table")
        ],
        "viewModels": [
            serialize_view_model(v) for v in _link_targets(domain, "view_models", "view_model")
        ],
        "formModels": [
            serialize_form_model(f, include_operations=True)
            for f in _link_targets(domain, "form_models", "form_model")
        ],
        "operationModels": [
            serialize_operation_model(op, include_form=True)
            for op in _link_targets(domain, "operation_models", "operation_model")
        ],
        **_timestamps(domain),
    }


# ── Combined payload ──────────────────────────────────────────────────────────

def serialize_dashboard(
    storage_models: Iterable = (),
    view_models: Iterable = (),
    form_models: Iterable = (),
    operation_models: Iterable = (),
    domain_models: Iterable = (),
) -> dict:
    return {
        "storageModels": [serialize_storage_model(m) for m in storage_models],
        "viewModels": [serialize_view_model(v) for v in view_models],
        "formModels": [serialize_form_model(f, include_operations=True) for f in form_models],
        "operationModels": [serialize_operation_model(op, include_form=True) for op in operation_models],
        "domainModels": [serialize_domain_model(d) for d in domain_models],
    }
