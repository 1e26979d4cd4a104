from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from skillbridge.core.auth import require_role
from skillbridge.core.database import get_db
from skillbridge.core.pagination import PageParams, page_params, paginate
from skillbridge.models.user import User, UserRole
from skillbridge.schemas.common import MessageResponse, PaginatedResponse
from skillbridge.schemas.review import (
    ReviewCreateRequest,
    ReviewMutationResponse,
    ReviewResponse,
    ReviewUpdateRequest,
)
from skillbridge.services.review_service import ReviewService

router = APIRouter()

student_only = require_role(UserRole.STUDENT)


@router.post("", response_model=ReviewMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    request: ReviewCreateRequest,
    current_user: User = Depends(student_only),
    db: AsyncSession = Depends(get_db),
):
    """Review a completed booking; updates the tutor's rating"""
    review = await ReviewService(db).create_review(current_user.id, request)
    return {"message": "Review created successfully", "review": review}


@router.get("/tutor/{tutor_id}", response_model=PaginatedResponse[ReviewResponse])
async def list_tutor_reviews(
    tutor_id: uuid.UUID,
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    reviews, total = await ReviewService(db).list_for_tutor(tutor_id, params)
    return paginate(reviews, total, params)


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await ReviewService(db).get_review(review_id)


@router.put("/{review_id}", response_model=ReviewMutationResponse)
async def update_review(
    review_id: uuid.UUID,
    request: ReviewUpdateRequest,
    current_user: User = Depends(student_only),
    db: AsyncSession = Depends(get_db),
):
    review = await ReviewService(db).update_review(review_id, current_user.id, request)
    return {"message": "Review updated successfully", "review": review}


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: uuid.UUID,
    current_user: User = Depends(student_only),
    db: AsyncSession = Depends(get_db),
):
    await ReviewService(db).delete_review(review_id, current_user.id)
    return {"message": "Review deleted successfully"}
