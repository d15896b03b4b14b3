from fastapi import APIRouter, Depends

from gift_planner.database import get_repository
from gift_planner.database.repository import Repository
from gift_planner.modules.users.schemas import User, UserCreate
from gift_planner.modules.users.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_user_service(repository: Repository = Depends(get_repository)) -> UserService:
    return UserService(repository)


@router.post("/users", response_model=User, response_model_exclude_none=True, status_code=201)
async def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service)
):
    """Create a user before the passkey registration (public)"""
    return service.create_user(user_data)
