import os
import time
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class SupabaseStorage:
    """Thin wrapper over one Supabase Storage bucket with public URLs."""

    def __init__(self, supabase: Client, bucket_name: str):
        if not bucket_name:
            raise ValueError("Storage bucket name must be configured")
        self.supabase = supabase
        self.bucket_name = bucket_name

    @staticmethod
    def build_object_path(user_id: str, filename: Optional[str]) -> str:
        """<user_id>/<epoch-ms>.<ext>, one folder per owner."""
        extension = os.path.splitext(filename or "")[1].lstrip(".").lower()
        stamp = int(time.time() * 1000)
        if extension:
            return f"{user_id}/{stamp}.{extension}"
        return f"{user_id}/{stamp}"

    def upload_file(self, file_content: bytes, path: str, content_type: str, upsert: bool = False) -> str:
        """Upload file to the bucket and return its public URL"""
        try:
            self.supabase.storage.from_(self.bucket_name).upload(
                path,
                file_content,
                file_options={"content-type": content_type, "upsert": "true" if upsert else "false"}
            )
        except Exception as e:
            logger.error(f"Failed to upload {path} to bucket {self.bucket_name}: {str(e)}")
            raise
        return self.get_public_url(path)

    def get_public_url(self, path: str) -> str:
        url = self.supabase.storage.from_(self.bucket_name).get_public_url(path)
        if not url:
            raise ValueError(f"Could not resolve public URL for {path}")
        return url

    def path_from_public_url(self, url: str, user_id: str) -> Optional[str]:
        """Recover the object path from a public URL produced by get_public_url."""
        marker = f"/{self.bucket_name}/"
        if marker in url:
            path = url.split(marker, 1)[1]
        elif user_id in url:
            path = url[url.index(user_id):]
        else:
            return None
        return path.split("?", 1)[0]

    def delete_file(self, path: str) -> bool:
        """Delete file from the bucket"""
        try:
            self.supabase.storage.from_(self.bucket_name).remove([path])
            return True
        except Exception as e:
            logger.warning(f"Failed to delete {path} from bucket {self.bucket_name}: {str(e)}")
            return False
