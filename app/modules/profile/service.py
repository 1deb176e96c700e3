from supabase import Client
from fastapi import HTTPException, UploadFile
from app.modules.profile.schemas import ProfileResponse
from app.core.user_scoped_service import utc_now_iso
from app.database.supabase_storage import SupabaseStorage
from app.config import settings
from typing import Any, Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = (
    "user_id, first_name, last_name, gender, avatar_url, date_of_birth, "
    "partner_id, couple_id, relationship_start_date"
)


class ProfileService:
    def __init__(self, supabase: Client, storage: Optional[SupabaseStorage] = None):
        self.supabase = supabase
        self._storage = storage

    @property
    def storage(self) -> SupabaseStorage:
        if self._storage is None:
            self._storage = SupabaseStorage(self.supabase, settings.avatars_bucket)
        return self._storage

    def find_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Profile row for a user, or None while it has not been created yet"""
        result = self.supabase.table("profiles")\
            .select(PROFILE_COLUMNS)\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_profile(self, user_data: Dict[str, Any]) -> ProfileResponse:
        """Merge the auth identity with the (possibly missing) profile row"""
        try:
            profile = self.find_profile(user_data["id"]) or {}
        except Exception as e:
            logger.error(f"Error fetching profile for {user_data['id']}: {e}")
            raise HTTPException(status_code=500, detail="Could not fetch profile data")

        return ProfileResponse(
            id=user_data["id"],
            email=user_data.get("email"),
            created_at=user_data.get("created_at"),
            first_name=profile.get("first_name"),
            last_name=profile.get("last_name"),
            gender=profile.get("gender"),
            avatar=profile.get("avatar_url"),
            date_of_birth=profile.get("date_of_birth"),
            partner_id=profile.get("partner_id"),
            couple_id=profile.get("couple_id"),
            relationship_start_date=profile.get("relationship_start_date"),
        )

    def save_profile(self, user_id: str, fields: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
        """Update the user's profile, creating it on first write.

        Returns the stored row and whether it was newly created.
        Raises whatever the client raises; callers decide the HTTP mapping.
        """
        result = self.supabase.table("profiles")\
            .update({**fields, "updated_at": utc_now_iso()})\
            .eq("user_id", user_id)\
            .execute()
        if result.data:
            return result.data[0], False

        inserted = self.supabase.table("profiles")\
            .insert({"user_id": user_id, **fields})\
            .execute()
        if not inserted.data:
            raise RuntimeError(f"Profile insert for {user_id} returned no row")
        return inserted.data[0], True

    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
        if not fields:
            raise HTTPException(status_code=400, detail="No profile fields provided")
        try:
            return self.save_profile(user_id, fields)
        except Exception as e:
            logger.error(f"Error saving profile for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Could not save profile information")

    async def upload_avatar(self, user_id: str, file: UploadFile) -> str:
        """Upload to the avatars bucket and point the profile at the object's public URL"""
        file_content = await file.read()
        path = SupabaseStorage.build_object_path(user_id, file.filename)
        try:
            public_url = self.storage.upload_file(
                file_content, path, file.content_type or "application/octet-stream", upsert=True
            )
        except Exception:
            raise HTTPException(status_code=500, detail="Could not upload avatar")

        try:
            self.save_profile(user_id, {"avatar_url": public_url})
        except Exception as e:
            logger.error(f"Error saving avatar URL for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Could not save avatar URL to profile")
        return public_url
