"""Pydantic schemas for form model requests."""
from typing import Any, Optional

from pydantic import Field, field_validator

from models.base import CamelModel, NonEmptyStr

# Input controls the dashboard knows how to render. Not enforced on write.
FORM_COMPONENTS = ("text", "textarea", "number", "select", "date")


class FormField(CamelModel):
    column: NonEmptyStr
    label: NonEmptyStr
    required: bool = False
    component: NonEmptyStr


class FormSchema(CamelModel):
    fields: list[FormField]
    meta: Optional[Any] = None

    @field_validator("fields")
    @classmethod
    def _at_least_one(cls, v):
        if not v:
            raise ValueError("configure at least one field")
        return v


class CreateFormRequest(CamelModel):
    name: NonEmptyStr = Field(..., description="Form name")
    description: Optional[str] = None
    storage_table_id: NonEmptyStr = Field(..., description="Target table")
    schema_: FormSchema = Field(..., alias="schema")

    def schema_document(self) -> dict:
        return self.schema_.model_dump(by_alias=True, exclude_none=True)
