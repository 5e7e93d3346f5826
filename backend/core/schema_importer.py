"""
Schema importer — reads a MySQL catalog (INFORMATION_SCHEMA) and turns it into
a persisted StorageModel with one StorageTable per base table.
"""
import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable
from urllib.parse import quote

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from config import settings
from core.errors import CatalogQueryError, EmptyCatalogError, UpstreamConnectionError, driver_message
from core.modeling import persist
from db.entities import StorageModel, StorageTable
from models.connection import ConnectionParams, ImportRequest
from models.table import CatalogColumnRow, CatalogTableRow, ColumnMeta, TableSchema

logger = logging.getLogger(__name__)

# Characters left unescaped in the user part, as browsers do for URI components.
USER_SAFE_CHARS = "!'()*"

TABLES_SQL = text(
    "SELECT TABLE_NAME AS table_name, TABLE_COMMENT AS table_comment "
    "FROM INFORMATION_SCHEMA.TABLES "
    "WHERE TABLE_SCHEMA = :schema AND TABLE_TYPE = 'BASE TABLE' "
    "ORDER BY TABLE_NAME"
)

COLUMNS_SQL = text(
    "SELECT TABLE_NAME AS table_name, COLUMN_NAME AS column_name, "
    "COLUMN_TYPE AS column_type, COLUMN_KEY AS column_key, "
    "IS_NULLABLE AS is_nullable, COLUMN_DEFAULT AS column_default, "
    "COLUMN_COMMENT AS column_comment "
    "FROM INFORMATION_SCHEMA.COLUMNS "
    "WHERE TABLE_SCHEMA = :schema "
    "ORDER BY TABLE_NAME, ORDINAL_POSITION"
)

Catalog = tuple[list[CatalogTableRow], list[CatalogColumnRow]]
CatalogReader = Callable[[ConnectionParams], Catalog]


# ── Catalog access ────────────────────────────────────────────────────────────

def create_engine_from_params(params: ConnectionParams) -> Engine:
    """Build a short-lived engine for the import target; the caller disposes it."""
    return create_engine(
        params.get_sqlalchemy_url(),
        pool_pre_ping=True,
        connect_args={"connect_timeout": settings.IMPORT_CONNECT_TIMEOUT_SECONDS},
    )


def fetch_catalog(params: ConnectionParams) -> Catalog:
    """
    Read base tables and their columns for `params.database`.
    The connection and engine are released on every path out of here.
    """
    engine = create_engine_from_params(params)
    try:
        try:
            conn = engine.connect()
        except (OperationalError, InterfaceError) as e:
            logger.warning("Could not connect to %s: %s", describe_connection(params), driver_message(e))
            raise UpstreamConnectionError(driver_message(e)) from e

        with conn:
            try:
                table_rows = [
                    CatalogTableRow(**row)
                    for row in conn.execute(TABLES_SQL, {"schema": params.database}).mappings()
                ]
                column_rows = [
                    CatalogColumnRow(**row)
                    for row in conn.execute(COLUMNS_SQL, {"schema": params.database}).mappings()
                ]
            except SQLAlchemyError as e:
                raise CatalogQueryError(driver_message(e)) from e
    finally:
        engine.dispose()

    logger.info(
        "Read catalog of %s: %d tables, %d columns",
        params.database, len(table_rows), len(column_rows),
    )
    return table_rows, column_rows


# ── Reshaping ─────────────────────────────────────────────────────────────────

def describe_connection(params: ConnectionParams) -> str:
    """Connection descriptor safe to persist: user, host, port and database only."""
    return f"mysql://{quote(params.user, safe=USER_SAFE_CHARS)}@{params.host}:{params.port}/{params.database}"


def group_columns(column_rows: list[CatalogColumnRow]) -> dict[str, list[ColumnMeta]]:
    """Group columns by owning table, keeping the catalog's ordinal order."""
    grouped: dict[str, list[ColumnMeta]] = defaultdict(list)
    for row in column_rows:
        grouped[row.table_name].append(ColumnMeta(
            name=row.column_name,
            type=row.column_type,
            key=row.column_key,
            nullable=row.is_nullable == "YES",
            default=row.column_default,
            comment=row.column_comment,
        ))
    return dict(grouped)


def build_tables(table_rows: list[CatalogTableRow], column_rows: list[CatalogColumnRow]) -> list[TableSchema]:
    """One TableSchema per catalog table, including tables that have no columns."""
    if not table_rows:
        raise EmptyCatalogError()
    grouped = group_columns(column_rows)
    return [
        TableSchema(
            name=row.table_name,
            description=row.table_comment or None,
            columns=grouped.get(row.table_name, []),
        )
        for row in table_rows
    ]


# ── Import ────────────────────────────────────────────────────────────────────

def import_storage_model(
    session: Session,
    req: ImportRequest,
    catalog: CatalogReader = fetch_catalog,
) -> StorageModel:
    """
    1. Read the target catalog
    2. Reshape it into per-table column lists
    3. Persist the StorageModel and its StorageTables in one commit
    4. Return the model re-read with every relation
    """
    table_rows, column_rows = catalog(req.connection)
    tables = build_tables(table_rows, column_rows)

    model = StorageModel(
        name=req.name,
        description=req.description or None,
        database=req.connection.database,
        connection=describe_connection(req.connection),
        schema={
            "importedAt": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "tables": [t.model_dump() for t in tables],
        },
        tables=[
            StorageTable(
                name=t.name,
                description=t.description or None,
                schema={"columns": [c.model_dump() for c in t.columns]},
            )
            for t in tables
        ],
    )
    return persist(session, model, "storage model")
