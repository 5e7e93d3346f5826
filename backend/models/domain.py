"""Pydantic schemas for domain model requests."""
from typing import Optional

from pydantic import Field, field_validator

from models.base import CamelModel, NonEmptyStr, unique_ids


class DomainField(CamelModel):
    key: NonEmptyStr
    name: NonEmptyStr
    type: Optional[str] = None
    required: Optional[bool] = None
    description: Optional[str] = None


class DomainSchema(CamelModel):
    fields: list[DomainField]

    @field_validator("fields")
    @classmethod
    def _at_least_one(cls, v):
        if not v:
            raise ValueError("define at least one business field")
        return v


class CreateDomainRequest(CamelModel):
    name: NonEmptyStr = Field(..., description="Domain name")
    description: Optional[str] = None
    schema_: DomainSchema = Field(..., alias="schema")
    storage_table_ids: list[NonEmptyStr] = Field(default_factory=list)
    view_model_ids: list[NonEmptyStr] = Field(default_factory=list)
    form_model_ids: list[NonEmptyStr] = Field(default_factory=list)
    operation_model_ids: list[NonEmptyStr] = Field(default_factory=list)

    @field_validator("storage_table_ids", "view_model_ids", "form_model_ids", "operation_model_ids", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return [] if v is None else v

    @field_validator("storage_table_ids", "view_model_ids", "form_model_ids", "operation_model_ids")
    @classmethod
    def _dedupe(cls, v):
        return unique_ids(v)

    def schema_document(self) -> dict:
        # exclude_unset keeps an explicit `description: null` but drops omitted keys.
        return self.schema_.model_dump(by_alias=True, exclude_unset=True)
