from typing import List

from fastapi import APIRouter, Depends

from gift_planner.core.dependencies import get_current_user
from gift_planner.core.schemas import Message
from gift_planner.database import get_repository
from gift_planner.database.repository import Repository
from gift_planner.modules.gifts.schemas import Gift, GiftCreate
from gift_planner.modules.gifts.service import GiftService
from gift_planner.modules.users.schemas import User
from gift_planner.modules.wishlists.schemas import Wishlist, WishlistUpdate
from gift_planner.modules.wishlists.service import WishlistService

router = APIRouter(prefix="/wishlists", tags=["wishlists"])


def get_wishlist_service(repository: Repository = Depends(get_repository)) -> WishlistService:
    return WishlistService(repository)


def get_gift_service(repository: Repository = Depends(get_repository)) -> GiftService:
    return GiftService(repository)


@router.get("/{wishlist_id}/gifts", response_model=List[Gift], response_model_exclude_none=True)
async def list_gifts(
    wishlist_id: str,
    current_user: User = Depends(get_current_user),
    service: GiftService = Depends(get_gift_service)
):
    return service.list_gifts(wishlist_id)


@router.post("/{wishlist_id}/gifts", response_model=Gift, response_model_exclude_none=True, status_code=201)
async def create_gift(
    wishlist_id: str,
    gift_data: GiftCreate,
    current_user: User = Depends(get_current_user),
    service: GiftService = Depends(get_gift_service)
):
    return service.create_gift(wishlist_id, gift_data, current_user.id)


@router.get("/{wishlist_id}", response_model=Wishlist, response_model_exclude_none=True)
async def get_wishlist(
    wishlist_id: str,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    return service.get_wishlist_by_id(wishlist_id)


@router.put("/{wishlist_id}", response_model=Wishlist, response_model_exclude_none=True)
async def update_wishlist(
    wishlist_id: str,
    wishlist_data: WishlistUpdate,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    return service.update_wishlist(wishlist_id, wishlist_data)


@router.delete("/{wishlist_id}", response_model=Message)
async def delete_wishlist(
    wishlist_id: str,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    service.delete_wishlist(wishlist_id)
    return Message(message="Wishlist deleted")
