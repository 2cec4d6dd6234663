"""Shared pagination schema for list endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_PAGE_SIZE = 100


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationQuery(CamelModel):
    page_num: int = Field(default=1, ge=1, description="Page number, starting at 1", examples=[1])
    page_size: int = Field(
        default=10, ge=1, le=MAX_PAGE_SIZE, description="Items per page", examples=[10]
    )

    @property
    def skip(self) -> int:
        return (self.page_num - 1) * self.page_size

    @property
    def take(self) -> int:
        return self.page_size
