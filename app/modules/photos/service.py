from supabase import Client
from fastapi import HTTPException, UploadFile
from app.core.user_scoped_service import UserScopedService
from app.database.supabase_storage import SupabaseStorage
from app.config import settings
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class PhotoService(UserScopedService):
    table_name = "photos"
    label = "photo"
    label_plural = "photos"

    def __init__(self, supabase: Client, storage: Optional[SupabaseStorage] = None):
        super().__init__(supabase)
        self.storage = storage or SupabaseStorage(supabase, settings.photos_bucket)

    async def upload_photo(
        self,
        user_id: str,
        file: UploadFile,
        title: str,
        description: Optional[str] = None
    ) -> Dict[str, Any]:
        """Store the image in the photos bucket, then record it with its public URL"""
        file_content = await file.read()
        path = SupabaseStorage.build_object_path(user_id, file.filename)
        try:
            public_url = self.storage.upload_file(
                file_content, path, file.content_type or "application/octet-stream"
            )
        except Exception:
            raise HTTPException(status_code=500, detail="Could not upload photo")

        try:
            return self.create(user_id, {
                "title": title,
                "description": description,
                "url": public_url,
            })
        except HTTPException:
            # Row insert failed; drop the orphaned object
            self.storage.delete_file(path)
            raise

    def delete_photo(self, user_id: str, photo_id: str) -> None:
        """Remove the stored object, then the row. A storage failure does not block the row delete."""
        photo = self.get(user_id, photo_id)
        path = self.storage.path_from_public_url(photo.get("url") or "", user_id)
        if path:
            self.storage.delete_file(path)
        else:
            logger.warning(f"Could not derive storage path for photo {photo_id}")
        self.delete(user_id, photo_id)
