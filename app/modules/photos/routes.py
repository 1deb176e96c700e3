from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form
from app.database.supabase_client import get_supabase
from app.modules.photos.schemas import PhotoUpdate, PhotoResponse
from app.modules.photos.service import PhotoService
from app.core.dependencies import get_current_user
from app.core.uploads import require_image
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/photos", tags=["photos"])


def get_photo_service(supabase: Client = Depends(get_supabase)) -> PhotoService:
    return PhotoService(supabase)


@router.get("", response_model=List[PhotoResponse])
async def list_photos(
    user_data: Dict = Depends(get_current_user),
    service: PhotoService = Depends(get_photo_service)
):
    return service.list(user_data["id"])


@router.post("", response_model=PhotoResponse, status_code=201)
async def create_photo(
    photo: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    user_data: Dict = Depends(get_current_user),
    service: PhotoService = Depends(get_photo_service)
):
    """Upload a photo (multipart: photo, title, description)"""
    if not title or not title.strip():
        raise HTTPException(status_code=400, detail="Photo file and title are required")
    require_image(photo)
    return await service.upload_photo(user_data["id"], photo, title.strip(), description)


@router.put("/{photo_id}", response_model=PhotoResponse)
async def update_photo(
    photo_id: str,
    photo_data: PhotoUpdate,
    user_data: Dict = Depends(get_current_user),
    service: PhotoService = Depends(get_photo_service)
):
    return service.update(user_data["id"], photo_id, photo_data.model_dump(exclude_unset=True))


@router.delete("/{photo_id}", status_code=204)
async def delete_photo(
    photo_id: str,
    user_data: Dict = Depends(get_current_user),
    service: PhotoService = Depends(get_photo_service)
):
    service.delete_photo(user_data["id"], photo_id)
    return None
