import os
import sys

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
# Keep the app's own store in memory; tests bind their own engine below.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.storage_models import get_catalog_reader
from db.database import enable_sqlite_foreign_keys, get_session
from db.entities import Base
from main import app
from models.connection import ImportRequest
from models.table import CatalogColumnRow, CatalogTableRow


def col(table, name, type_="varchar(255)", key="", nullable="YES", default=None, comment=""):
    return CatalogColumnRow(
        table_name=table,
        column_name=name,
        column_type=type_,
        column_key=key,
        is_nullable=nullable,
        column_default=default,
        column_comment=comment,
    )


class FakeCatalog:
    """Stands in for fetch_catalog; remembers the connection it was asked for."""

    def __init__(self, tables, columns):
        self.tables = tables
        self.columns = columns
        self.calls = []

    def __call__(self, params):
        self.calls.append(params)
        return list(self.tables), list(self.columns)


@pytest.fixture
def shop_catalog():
    # Rows arrive the way INFORMATION_SCHEMA returns them: by table, then ordinal.
    tables = [
        CatalogTableRow(table_name="orders", table_comment=""),
        CatalogTableRow(table_name="users", table_comment="Registered users"),
    ]
    columns = [
        col("orders", "id", "int", key="PRI", nullable="NO"),
        col("orders", "user_id", "int", key="MUL", nullable="NO"),
        col("users", "id", "int", key="PRI", nullable="NO"),
        col("users", "name", "varchar(64)"),
        col("users", "email", "varchar(255)", key="UNI", comment="Login address"),
    ]
    return FakeCatalog(tables, columns)


@pytest.fixture
def import_request():
    return ImportRequest.model_validate({
        "name": "Shop",
        "description": "Shop database",
        "connection": {
            "host": "db.internal",
            "port": "3307",
            "user": "reporter",
            "password": "s3cr3t-pass",
            "database": "shop",
        },
    })


@pytest.fixture
def store_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(store_engine):
    return sessionmaker(bind=store_engine)


@pytest.fixture
def session(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(session_factory, shop_catalog):
    def _session_override():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_session] = _session_override
    app.dependency_overrides[get_catalog_reader] = lambda: shop_catalog
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
