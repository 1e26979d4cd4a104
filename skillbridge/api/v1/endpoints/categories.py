from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from skillbridge.core.auth import require_role
from skillbridge.core.database import get_db
from skillbridge.models.user import UserRole
from skillbridge.schemas.category import (
    CategoryCreate,
    CategoryMutationResponse,
    CategoryResponse,
    CategoryUpdate,
)
from skillbridge.schemas.common import MessageResponse
from skillbridge.services.category_service import CategoryService

router = APIRouter()

admin_only = require_role(UserRole.ADMIN)


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await CategoryService(db).list_categories()


@router.post(
    "",
    response_model=CategoryMutationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(admin_only)],
)
async def create_category(request: CategoryCreate, db: AsyncSession = Depends(get_db)):
    category = await CategoryService(db).create_category(request)
    return {"message": "Category created successfully", "category": category}


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await CategoryService(db).get_category(category_id)


@router.put("/{category_id}", response_model=CategoryMutationResponse, dependencies=[Depends(admin_only)])
async def update_category(
    category_id: uuid.UUID,
    request: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
):
    category = await CategoryService(db).update_category(category_id, request)
    return {"message": "Category updated successfully", "category": category}


@router.delete("/{category_id}", response_model=MessageResponse, dependencies=[Depends(admin_only)])
async def delete_category(category_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Delete a category that no booking references"""
    await CategoryService(db).delete_category(category_id)
    return {"message": "Category deleted successfully"}
