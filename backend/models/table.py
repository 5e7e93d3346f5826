"""Pydantic schemas for imported table and column metadata."""
from typing import Any, Optional

from pydantic import BaseModel, Field


class ColumnMeta(BaseModel):
    name: str
    type: Optional[str] = None
    key: Optional[str] = None        # "PRI", "UNI", "MUL" or ""
    nullable: bool = True
    default: Optional[Any] = None
    comment: Optional[str] = None


class TableSchema(BaseModel):
    name: str
    description: Optional[str] = None
    columns: list[ColumnMeta] = Field(default_factory=list)


class CatalogTableRow(BaseModel):
    table_name: str
    table_comment: Optional[str] = None


class CatalogColumnRow(BaseModel):
    table_name: str
    column_name: str
    column_type: Optional[str] = None
    column_key: Optional[str] = None
    is_nullable: str = "YES"
    column_default: Optional[Any] = None
    column_comment: Optional[str] = None
