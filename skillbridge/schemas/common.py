from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Generic, List, TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationMeta(CamelModel):
    page: int = Field(..., description="Current page, 1-based")
    limit: int = Field(..., description="Page size")
    total: int = Field(..., description="Total matching rows")
    pages: int = Field(..., description="Total number of pages")


class PaginatedResponse(CamelModel, Generic[T]):
    data: List[T] = Field(..., description="Rows on this page")
    pagination: PaginationMeta = Field(..., description="Pagination metadata")


class MessageResponse(CamelModel):
    message: str = Field(..., description="Human readable outcome")
