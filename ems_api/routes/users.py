"""User management endpoints (admin only)"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ems_api.auth import Permission, require_permission
from ems_api.database import get_db
from ems_api.schemas import ErrorResponse, UserCreate, UserResponse
from ems_api.services import UserService

router = APIRouter(
    prefix="/api/v1/users",
    tags=["Users"],
    dependencies=[Depends(require_permission(Permission.USERS_MANAGE))],
)


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    summary="Create User",
    responses={409: {"model": ErrorResponse, "description": "Email already registered"}},
)
async def create_user(user: UserCreate, db: Session = Depends(get_db)):
    created = UserService(db).create_user(**user.model_dump())
    return UserResponse.model_validate(created)


@router.get("", response_model=list[UserResponse], summary="List Users")
async def list_users(db: Session = Depends(get_db)):
    return [UserResponse.model_validate(u) for u in UserService(db).list_users()]
