from fastapi import APIRouter, Depends

from gift_planner.core.dependencies import get_current_user
from gift_planner.core.schemas import Message
from gift_planner.database import get_repository
from gift_planner.database.repository import Repository
from gift_planner.modules.assignments.schemas import GiftAssignment, GiftAssignmentUpdate
from gift_planner.modules.assignments.service import AssignmentService
from gift_planner.modules.users.schemas import User

router = APIRouter(prefix="/assignments", tags=["assignments"])


def get_assignment_service(repository: Repository = Depends(get_repository)) -> AssignmentService:
    return AssignmentService(repository)


@router.put("/{assignment_id}", response_model=GiftAssignment, response_model_exclude_none=True)
async def update_assignment(
    assignment_id: str,
    assignment_data: GiftAssignmentUpdate,
    current_user: User = Depends(get_current_user),
    service: AssignmentService = Depends(get_assignment_service)
):
    """Mark purchased / not purchased; purchasedAt is stamped on first purchase"""
    return service.update_assignment(assignment_id, assignment_data)


@router.delete("/{assignment_id}", response_model=Message)
async def delete_assignment(
    assignment_id: str,
    current_user: User = Depends(get_current_user),
    service: AssignmentService = Depends(get_assignment_service)
):
    service.delete_assignment(assignment_id)
    return Message(message="Assignment deleted")
