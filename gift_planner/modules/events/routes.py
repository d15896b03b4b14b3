from typing import List

from fastapi import APIRouter, Depends

from gift_planner.core.dependencies import get_current_user
from gift_planner.core.schemas import Message
from gift_planner.database import get_repository
from gift_planner.database.repository import Repository
from gift_planner.modules.events.schemas import Event, EventUpdate
from gift_planner.modules.events.service import EventService
from gift_planner.modules.receivers.schemas import Receiver, ReceiverCreate
from gift_planner.modules.receivers.service import ReceiverService
from gift_planner.modules.users.schemas import User

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(repository: Repository = Depends(get_repository)) -> EventService:
    return EventService(repository)


def get_receiver_service(repository: Repository = Depends(get_repository)) -> ReceiverService:
    return ReceiverService(repository)


@router.get("/{event_id}/receivers", response_model=List[Receiver], response_model_exclude_none=True)
async def list_receivers(
    event_id: str,
    current_user: User = Depends(get_current_user),
    service: ReceiverService = Depends(get_receiver_service)
):
    return service.list_receivers(event_id)


@router.post("/{event_id}/receivers", response_model=Receiver, response_model_exclude_none=True, status_code=201)
async def create_receiver(
    event_id: str,
    receiver_data: ReceiverCreate,
    current_user: User = Depends(get_current_user),
    service: ReceiverService = Depends(get_receiver_service)
):
    return service.create_receiver(event_id, receiver_data, current_user.id)


@router.get("/{event_id}", response_model=Event, response_model_exclude_none=True)
async def get_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    return service.get_event_by_id(event_id)


@router.put("/{event_id}", response_model=Event, response_model_exclude_none=True)
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    current_user: User = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    return service.update_event(event_id, event_data)


@router.delete("/{event_id}", response_model=Message)
async def delete_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    service.delete_event(event_id)
    return Message(message="Event deleted")
