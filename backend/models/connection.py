"""Pydantic schemas for catalog import requests."""
import math
from typing import Any, Optional

from pydantic import Field, field_validator
from sqlalchemy.engine import URL

from config import settings
from models.base import CamelModel, NonEmptyStr


def normalize_port(value: Any) -> int:
    """Numeric or numeric-string port; anything missing, unparsable, fractional or ≤ 0 falls back to the default."""
    if value is None or isinstance(value, bool):
        return settings.IMPORT_DEFAULT_PORT
    try:
        port = float(str(value).strip() or 0)
    except ValueError:
        return settings.IMPORT_DEFAULT_PORT
    if not math.isfinite(port) or port <= 0 or not port.is_integer():
        return settings.IMPORT_DEFAULT_PORT
    return int(port)


class ConnectionParams(CamelModel):
    host: NonEmptyStr = Field(..., description="Database host")
    port: int = Field(default_factory=lambda: settings.IMPORT_DEFAULT_PORT, description="Database port")
    user: NonEmptyStr = Field(..., description="Username")
    password: str = Field("", description="Password (never persisted)")
    database: NonEmptyStr = Field(..., description="Database (schema) to import")

    @field_validator("port", mode="before")
    @classmethod
    def _port(cls, v):
        return normalize_port(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return "" if v is None else v

    def get_sqlalchemy_url(self) -> URL:
        return URL.create(
            "mysql+pymysql",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )


class ImportRequest(CamelModel):
    name: NonEmptyStr = Field(..., description="Storage model name")
    description: Optional[str] = None
    connection: ConnectionParams
