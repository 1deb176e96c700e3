from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.invites.schemas import (
    InviteCodeResponse, UseInviteRequest, PartnerResponse, PairingResponse
)
from app.modules.invites.service import InviteService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/invite", tags=["invite"])


def get_invite_service(supabase: Client = Depends(get_service_supabase)) -> InviteService:
    # Pairing writes the partner's profile too, so this runs with the service-role client
    return InviteService(supabase)


@router.post("/generate", response_model=InviteCodeResponse, status_code=201)
async def generate_invite_code(
    user_data: Dict = Depends(get_current_user),
    service: InviteService = Depends(get_invite_service)
):
    """Create a single-use invite code, valid for a limited number of days"""
    return service.create_code(user_data["id"])


@router.post("/use", response_model=PairingResponse)
async def use_invite_code(
    body: UseInviteRequest,
    user_data: Dict = Depends(get_current_user),
    service: InviteService = Depends(get_invite_service)
):
    """Redeem a partner's invite code and link both profiles"""
    return service.use_code(user_data["id"], body.code)


@router.get("/partner", response_model=PartnerResponse)
async def get_partner(
    user_data: Dict = Depends(get_current_user),
    service: InviteService = Depends(get_invite_service)
):
    return service.get_partner(user_data["id"])


@router.delete("/partner", status_code=204)
async def unpair(
    user_data: Dict = Depends(get_current_user),
    service: InviteService = Depends(get_invite_service)
):
    """Dissolve the couple on both profiles"""
    service.unpair(user_data["id"])
    return None
