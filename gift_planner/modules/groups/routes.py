from typing import List

from fastapi import APIRouter, Depends

from gift_planner.core.dependencies import get_current_user
from gift_planner.core.schemas import Message
from gift_planner.database import get_repository
from gift_planner.database.repository import Repository
from gift_planner.modules.events.schemas import Event, EventCreate
from gift_planner.modules.events.service import EventService
from gift_planner.modules.groups.schemas import (
    Group, GroupCreate, GroupUpdate, GroupMember, GroupMemberAdd
)
from gift_planner.modules.groups.service import GroupService
from gift_planner.modules.users.schemas import User

router = APIRouter(prefix="/groups", tags=["groups"])


def get_group_service(repository: Repository = Depends(get_repository)) -> GroupService:
    return GroupService(repository)


def get_event_service(repository: Repository = Depends(get_repository)) -> EventService:
    return EventService(repository)


@router.get("", response_model=List[Group], response_model_exclude_none=True)
async def list_groups(
    current_user: User = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """List groups the current user created or is a member of"""
    return service.list_groups(current_user.id)


@router.post("", response_model=Group, response_model_exclude_none=True, status_code=201)
async def create_group(
    group_data: GroupCreate,
    current_user: User = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Create a new group; the creator is added as a member"""
    return service.create_group(group_data, current_user.id)


@router.get("/{group_id}/members", response_model=List[GroupMember], response_model_exclude_none=True)
async def list_members(
    group_id: str,
    current_user: User = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    return service.list_members(group_id)


@router.post("/{group_id}/members", response_model=GroupMember, response_model_exclude_none=True, status_code=201)
async def add_member(
    group_id: str,
    member_data: GroupMemberAdd,
    current_user: User = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    return service.add_member(group_id, member_data)


@router.delete("/{group_id}/members/{member_id}", response_model=Message)
async def remove_member(
    group_id: str,
    member_id: str,
    current_user: User = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Remove a membership by its id (not the user id)"""
    service.remove_member(group_id, member_id)
    return Message(message="Member removed")


@router.get("/{group_id}/events", response_model=List[Event], response_model_exclude_none=True)
async def list_events(
    group_id: str,
    current_user: User = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    return service.list_events(group_id)


@router.post("/{group_id}/events", response_model=Event, response_model_exclude_none=True, status_code=201)
async def create_event(
    group_id: str,
    event_data: EventCreate,
    current_user: User = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    return service.create_event(group_id, event_data, current_user.id)


@router.get("/{group_id}", response_model=Group, response_model_exclude_none=True)
async def get_group(
    group_id: str,
    current_user: User = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    return service.get_group_by_id(group_id)


@router.put("/{group_id}", response_model=Group, response_model_exclude_none=True)
async def update_group(
    group_id: str,
    group_data: GroupUpdate,
    current_user: User = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    return service.update_group(group_id, group_data)


@router.delete("/{group_id}", response_model=Message)
async def delete_group(
    group_id: str,
    current_user: User = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    service.delete_group(group_id)
    return Message(message="Group deleted")
