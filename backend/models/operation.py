"""Pydantic schemas for operation model requests."""
from typing import Any, Literal, Optional

from pydantic import Field

from models.base import CamelModel, NonEmptyStr

OperationType = Literal["CREATE", "READ", "UPDATE", "DELETE", "CUSTOM"]


class CreateOperationRequest(CamelModel):
    name: NonEmptyStr = Field(..., description="Operation name")
    description: Optional[str] = None
    type: OperationType = "READ"
    endpoint: Optional[str] = None
    method: Optional[str] = None
    storage_model_id: Optional[str] = None
    form_model_id: Optional[str] = None
    request_schema: Optional[Any] = None     # free-form JSON
    response_schema: Optional[Any] = None    # free-form JSON
