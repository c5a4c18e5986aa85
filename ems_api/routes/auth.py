"""Login and current-user endpoints"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ems_api.auth import authenticate, create_access_token, get_current_user
from ems_api.database import get_db
from ems_api.models import User
from ems_api.schemas import ErrorResponse, LoginRequest, TokenResponse, UserResponse

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login",
    description="Exchange email and password for a bearer token.",
    responses={401: {"model": ErrorResponse, "description": "Invalid email or password"}},
)
async def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate(db, credentials.email, credentials.password)
    token = create_access_token(user.id, user.email, user.role)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current User",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def me(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)
