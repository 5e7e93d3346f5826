"""Pydantic schemas for view model requests."""
from typing import Optional

from pydantic import Field, field_validator

from models.base import CamelModel, NonEmptyStr


class LayoutField(CamelModel):
    column: NonEmptyStr
    label: NonEmptyStr
    type: Optional[str] = None
    sortable: Optional[bool] = None


class ViewLayout(CamelModel):
    fields: list[LayoutField]

    @field_validator("fields")
    @classmethod
    def _at_least_one(cls, v):
        if not v:
            raise ValueError("select at least one field")
        return v


class CreateViewRequest(CamelModel):
    name: NonEmptyStr = Field(..., description="View name")
    description: Optional[str] = None
    storage_model_id: NonEmptyStr = Field(..., description="Owning storage model")
    storage_table_id: NonEmptyStr = Field(..., description="Source table")
    layout: ViewLayout

    def layout_document(self) -> dict:
        # Optional keys the caller left out stay out of the stored document.
        return self.layout.model_dump(by_alias=True, exclude_unset=True)
