"""SQLAlchemy ORM entities for the modeling store."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

OPERATION_TYPES = ("CREATE", "READ", "UPDATE", "DELETE", "CUSTOM")


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class StorageModel(TimestampMixin, Base):
    __tablename__ = "data_storage_models"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    database: Mapped[str] = mapped_column(String(255))
    # user@host:port/db only; the password is never stored.
    connection: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    schema: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    tables: Mapped[list["StorageTable"]] = relationship(
        back_populates="storage_model",
        cascade="all, delete-orphan",
        order_by="StorageTable.name",
    )
    operations: Mapped[list["OperationModel"]] = relationship(
        back_populates="storage_model",
        order_by="OperationModel.created_at.desc()",
    )
    views: Mapped[list["ViewModel"]] = relationship(
        back_populates="storage_model",
        order_by="ViewModel.created_at.desc()",
    )


class StorageTable(TimestampMixin, Base):
    __tablename__ = "data_storage_tables"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    storage_model_id: Mapped[str] = mapped_column(
        ForeignKey("data_storage_models.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    schema: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    storage_model: Mapped[StorageModel] = relationship(back_populates="tables")
    forms: Mapped[list["FormModel"]] = relationship(
        back_populates="storage_table",
        order_by="FormModel.created_at.desc()",
    )
    views: Mapped[list["ViewModel"]] = relationship(
        back_populates="storage_table",
        order_by="ViewModel.created_at.desc()",
    )


class ViewModel(TimestampMixin, Base):
    __tablename__ = "data_view_models"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    storage_model_id: Mapped[str] = mapped_column(ForeignKey("data_storage_models.id"), index=True)
    storage_table_id: Mapped[str] = mapped_column(ForeignKey("data_storage_tables.id"), index=True)
    layout: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    storage_model: Mapped[StorageModel] = relationship(back_populates="views")
    storage_table: Mapped[StorageTable] = relationship(back_populates="views")


class FormModel(TimestampMixin, Base):
    __tablename__ = "data_form_models"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    storage_table_id: Mapped[str] = mapped_column(ForeignKey("data_storage_tables.id"), index=True)
    schema: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    storage_table: Mapped[StorageTable] = relationship(back_populates="forms")
    operations: Mapped[list["OperationModel"]] = relationship(
        back_populates="form_model",
        order_by="OperationModel.created_at.desc()",
    )


class OperationModel(TimestampMixin, Base):
    __tablename__ = "data_operation_models"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(16), default="READ")
    endpoint: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    method: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    storage_model_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("data_storage_models.id"), nullable=True, index=True
    )
    form_model_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("data_form_models.id"), nullable=True, index=True
    )
    request_schema: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    response_schema: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)

    storage_model: Mapped[Optional[StorageModel]] = relationship(back_populates="operations")
    form_model: Mapped[Optional[FormModel]] = relationship(back_populates="operations")


class DomainModel(TimestampMixin, Base):
    __tablename__ = "data_domain_models"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    schema: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    storage_tables: Mapped[list["DomainStorageTable"]] = relationship(
        cascade="all, delete-orphan", order_by="DomainStorageTable.created_at.desc()"
    )
    view_models: Mapped[list["DomainViewModel"]] = relationship(
        cascade="all, delete-orphan", order_by="DomainViewModel.created_at.desc()"
    )
    form_models: Mapped[list["DomainFormModel"]] = relationship(
        cascade="all, delete-orphan", order_by="DomainFormModel.created_at.desc()"
    )
    operation_models: Mapped[list["DomainOperationModel"]] = relationship(
        cascade="all, delete-orphan", order_by="DomainOperationModel.created_at.desc()"
    )


# ── Join links (non-owning, one row per domain/target pair) ──────────────────

class DomainStorageTable(Base):
    __tablename__ = "data_domain_storage_tables"

    domain_model_id: Mapped[str] = mapped_column(
        ForeignKey("data_domain_models.id", ondelete="CASCADE"), primary_key=True
    )
    storage_table_id: Mapped[str] = mapped_column(ForeignKey("data_storage_tables.id"), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    storage_table: Mapped[StorageTable] = relationship()


class DomainViewModel(Base):
    __tablename__ = "data_domain_view_models"

    domain_model_id: Mapped[str] = mapped_column(
        ForeignKey("data_domain_models.id", ondelete="CASCADE"), primary_key=True
    )
    view_model_id: Mapped[str] = mapped_column(ForeignKey("data_view_models.id"), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    view_model: Mapped[ViewModel] = relationship()


class DomainFormModel(Base):
    __tablename__ = "data_domain_form_models"

    domain_model_id: Mapped[str] = mapped_column(
        ForeignKey("data_domain_models.id", ondelete="CASCADE"), primary_key=True
    )
    form_model_id: Mapped[str] = mapped_column(ForeignKey("data_form_models.id"), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    form_model: Mapped[FormModel] = relationship()


class DomainOperationModel(Base):
    __tablename__ = "data_domain_operation_models"

    domain_model_id: Mapped[str] = mapped_column(
        ForeignKey("data_domain_models.id", ondelete="CASCADE"), primary_key=True
    )
    operation_model_id: Mapped[str] = mapped_column(ForeignKey("data_operation_models.id"), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    operation_model: Mapped[OperationModel] = relationship()
