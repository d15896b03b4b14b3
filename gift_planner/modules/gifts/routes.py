from typing import List

from fastapi import APIRouter, Depends

from gift_planner.core.dependencies import get_current_user
from gift_planner.core.schemas import Message
from gift_planner.database import get_repository
from gift_planner.database.repository import Repository
from gift_planner.modules.assignments.schemas import GiftAssignment, GiftAssignmentCreate
from gift_planner.modules.assignments.service import AssignmentService
from gift_planner.modules.gifts.schemas import Gift, GiftUpdate
from gift_planner.modules.gifts.service import GiftService
from gift_planner.modules.users.schemas import User

router = APIRouter(prefix="/gifts", tags=["gifts"])


def get_gift_service(repository: Repository = Depends(get_repository)) -> GiftService:
    return GiftService(repository)


def get_assignment_service(repository: Repository = Depends(get_repository)) -> AssignmentService:
    return AssignmentService(repository)


@router.get("/{gift_id}/assignments", response_model=List[GiftAssignment], response_model_exclude_none=True)
async def list_assignments(
    gift_id: str,
    current_user: User = Depends(get_current_user),
    service: AssignmentService = Depends(get_assignment_service)
):
    return service.list_assignments(gift_id)


@router.post(
    "/{gift_id}/assignments",
    response_model=GiftAssignment,
    response_model_exclude_none=True,
    status_code=201,
)
async def create_assignment(
    gift_id: str,
    assignment_data: GiftAssignmentCreate,
    current_user: User = Depends(get_current_user),
    service: AssignmentService = Depends(get_assignment_service)
):
    """Assign the gift to the user who will buy it; the current user is recorded as assigner"""
    return service.create_assignment(gift_id, assignment_data, current_user.id)


@router.get("/{gift_id}", response_model=Gift, response_model_exclude_none=True)
async def get_gift(
    gift_id: str,
    current_user: User = Depends(get_current_user),
    service: GiftService = Depends(get_gift_service)
):
    return service.get_gift_by_id(gift_id)


@router.put("/{gift_id}", response_model=Gift, response_model_exclude_none=True)
async def update_gift(
    gift_id: str,
    gift_data: GiftUpdate,
    current_user: User = Depends(get_current_user),
    service: GiftService = Depends(get_gift_service)
):
    return service.update_gift(gift_id, gift_data)


@router.delete("/{gift_id}", response_model=Message)
async def delete_gift(
    gift_id: str,
    current_user: User = Depends(get_current_user),
    service: GiftService = Depends(get_gift_service)
):
    service.delete_gift(gift_id)
    return Message(message="Gift deleted")
