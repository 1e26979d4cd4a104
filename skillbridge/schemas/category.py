from pydantic import AfterValidator, Field
from typing import Annotated, Optional
from datetime import datetime
import uuid

from skillbridge.core import constants
from skillbridge.schemas.common import CamelModel


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Category name must be a non-empty string")
    return value


def _clean_description(value: str) -> Optional[str]:
    return value.strip() or None


CategoryName = Annotated[str, Field(max_length=constants.CATEGORY_NAME_MAX_LENGTH), AfterValidator(_clean_name)]
CategoryDescription = Annotated[str, Field(max_length=constants.CATEGORY_DESCRIPTION_MAX_LENGTH), AfterValidator(_clean_description)]


class CategoryCreate(CamelModel):
    name: CategoryName = Field(..., description="Unique category name")
    description: Optional[CategoryDescription] = Field(None, description="Description")


class CategoryUpdate(CamelModel):
    name: Optional[CategoryName] = Field(None, description="New name")
    description: Optional[CategoryDescription] = Field(None, description="New description")


class CategoryResponse(CamelModel):
    id: uuid.UUID = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")
    description: Optional[str] = Field(None, description="Description")
    created_at: datetime = Field(..., description="Creation time")


class CategoryMutationResponse(CamelModel):
    message: str = Field(..., description="Outcome")
    category: CategoryResponse = Field(..., description="Category")
