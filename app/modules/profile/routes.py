from fastapi import APIRouter, Depends, Response, UploadFile, File
from app.database.supabase_client import get_supabase
from app.modules.profile.schemas import (
    ProfileUpdate, ProfileResponse, ProfileSaveResponse, AvatarUploadResponse
)
from app.modules.profile.service import ProfileService
from app.core.dependencies import get_current_user
from app.core.uploads import require_image
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/profile", tags=["profile"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("", response_model=ProfileResponse)
async def get_profile(
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Auth identity merged with the stored profile"""
    return service.get_profile(user_data)


@router.patch("", response_model=ProfileSaveResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    response: Response,
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update profile fields; the first write creates the profile (201)"""
    profile, created = service.update_profile(user_data["id"], profile_data.to_columns())
    if created:
        response.status_code = 201
        return ProfileSaveResponse(message="Profile created successfully", profile=profile)
    return ProfileSaveResponse(message="Profile updated successfully", profile=profile)


@router.post("/avatar", response_model=AvatarUploadResponse)
async def upload_avatar(
    avatar: Optional[UploadFile] = File(None),
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Upload a new avatar image (multipart field: avatar)"""
    require_image(avatar)
    avatar_url = await service.upload_avatar(user_data["id"], avatar)
    return AvatarUploadResponse(message="Avatar uploaded successfully", avatar_url=avatar_url)
