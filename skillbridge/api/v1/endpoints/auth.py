from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.auth import get_current_user
from skillbridge.core.database import get_db
from skillbridge.core.rate_limit import auth_rate_limit
from skillbridge.models.user import User
from skillbridge.schemas.user import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from skillbridge.services.user_service import UserService

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(auth_rate_limit)],
)
async def register(request: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create a STUDENT or TUTOR account and sign it in"""
    user, token = await UserService(db).register(request)
    return {"message": "User registered successfully", "user": user, "token": token}


@router.post("/login", response_model=AuthResponse, dependencies=[Depends(auth_rate_limit)])
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    user, token = await UserService(db).login(request)
    return {"message": "Login successful", "user": user, "token": token}


@router.get("/me", response_model=MeResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Current user with tutor profile"""
    return {"user": current_user}
