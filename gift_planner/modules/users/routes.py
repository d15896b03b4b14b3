from typing import List

from fastapi import APIRouter, Depends

from gift_planner.core.dependencies import get_current_user
from gift_planner.database import get_repository
from gift_planner.database.repository import Repository
from gift_planner.modules.users.schemas import User, UserUpdate
from gift_planner.modules.users.service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(repository: Repository = Depends(get_repository)) -> UserService:
    return UserService(repository)


@router.get("", response_model=List[User], response_model_exclude_none=True)
async def list_users(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.list_users()


@router.get("/{user_id}", response_model=User, response_model_exclude_none=True)
async def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.get_user_by_id(user_id)


@router.put("/{user_id}", response_model=User, response_model_exclude_none=True)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Update name and/or email; emails are stored trimmed and lower-cased"""
    return service.update_user(user_id, user_data)
