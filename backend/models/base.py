"""Shared pydantic building blocks for request payloads."""
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


class CamelModel(BaseModel):
    """Accepts camelCase keys from the dashboard client, snake_case from Python callers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def unique_ids(values: Optional[list[str]]) -> list[str]:
    """Drop repeated ids, keeping the first occurrence."""
    return list(dict.fromkeys(values or []))
