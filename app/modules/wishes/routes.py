from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.wishes.schemas import WishCreate, WishUpdate, WishResponse
from app.modules.wishes.service import WishService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/wishes", tags=["wishes"])


def get_wish_service(supabase: Client = Depends(get_supabase)) -> WishService:
    return WishService(supabase)


@router.get("", response_model=List[WishResponse])
async def list_wishes(
    user_data: Dict = Depends(get_current_user),
    service: WishService = Depends(get_wish_service)
):
    """List the caller's wishes, newest first"""
    return service.list(user_data["id"])


@router.post("", response_model=WishResponse, status_code=201)
async def create_wish(
    wish_data: WishCreate,
    user_data: Dict = Depends(get_current_user),
    service: WishService = Depends(get_wish_service)
):
    return service.create(user_data["id"], wish_data.model_dump())


@router.put("/{wish_id}", response_model=WishResponse)
async def update_wish(
    wish_id: str,
    wish_data: WishUpdate,
    user_data: Dict = Depends(get_current_user),
    service: WishService = Depends(get_wish_service)
):
    """Update a wish; also used to tick it off via `completed`"""
    return service.update(user_data["id"], wish_id, wish_data.model_dump(exclude_unset=True))


@router.delete("/{wish_id}", status_code=204)
async def delete_wish(
    wish_id: str,
    user_data: Dict = Depends(get_current_user),
    service: WishService = Depends(get_wish_service)
):
    service.delete(user_data["id"], wish_id)
    return None
