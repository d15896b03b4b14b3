from typing import List

from fastapi import APIRouter, Depends

from gift_planner.core.dependencies import get_current_user
from gift_planner.core.schemas import Message
from gift_planner.database import get_repository
from gift_planner.database.repository import Repository
from gift_planner.modules.receivers.schemas import Receiver, ReceiverUpdate
from gift_planner.modules.receivers.service import ReceiverService
from gift_planner.modules.users.schemas import User
from gift_planner.modules.wishlists.schemas import Wishlist, WishlistCreate
from gift_planner.modules.wishlists.service import WishlistService

router = APIRouter(prefix="/receivers", tags=["receivers"])


def get_receiver_service(repository: Repository = Depends(get_repository)) -> ReceiverService:
    return ReceiverService(repository)


def get_wishlist_service(repository: Repository = Depends(get_repository)) -> WishlistService:
    return WishlistService(repository)


@router.get("/{receiver_id}/wishlists", response_model=List[Wishlist], response_model_exclude_none=True)
async def list_wishlists(
    receiver_id: str,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    return service.list_wishlists(receiver_id)


@router.post("/{receiver_id}/wishlists", response_model=Wishlist, response_model_exclude_none=True, status_code=201)
async def create_wishlist(
    receiver_id: str,
    wishlist_data: WishlistCreate,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Create a wishlist; omit eventId for a general wishlist"""
    return service.create_wishlist(receiver_id, wishlist_data, current_user.id)


@router.get("/{receiver_id}", response_model=Receiver, response_model_exclude_none=True)
async def get_receiver(
    receiver_id: str,
    current_user: User = Depends(get_current_user),
    service: ReceiverService = Depends(get_receiver_service)
):
    return service.get_receiver_by_id(receiver_id)


@router.put("/{receiver_id}", response_model=Receiver, response_model_exclude_none=True)
async def update_receiver(
    receiver_id: str,
    receiver_data: ReceiverUpdate,
    current_user: User = Depends(get_current_user),
    service: ReceiverService = Depends(get_receiver_service)
):
    return service.update_receiver(receiver_id, receiver_data)


@router.delete("/{receiver_id}", response_model=Message)
async def delete_receiver(
    receiver_id: str,
    current_user: User = Depends(get_current_user),
    service: ReceiverService = Depends(get_receiver_service)
):
    service.delete_receiver(receiver_id)
    return Message(message="Receiver deleted")
