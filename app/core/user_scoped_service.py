from supabase import Client
from fastapi import HTTPException
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserScopedService:
    """CRUD over a table whose rows each belong to exactly one user.

    Every query is filtered by user_id, so a caller can never read or
    change another user's rows. Subclasses set the table and labels.
    """

    table_name: str = ""
    label: str = "record"
    label_plural: str = "records"
    order_by: str = "created_at"
    order_desc: bool = True

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list(self, user_id: str) -> List[Dict[str, Any]]:
        try:
            result = self.supabase.table(self.table_name)\
                .select("*")\
                .eq("user_id", user_id)\
                .order(self.order_by, desc=self.order_desc)\
                .execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Error listing {self.table_name} for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Could not fetch {self.label_plural}")

    def get(self, user_id: str, record_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table(self.table_name)\
                .select("*")\
                .eq("id", record_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching {self.table_name} {record_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Could not fetch {self.label}")
        if not result.data:
            raise self.not_found()
        return result.data[0]

    def create(self, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = self.supabase.table(self.table_name)\
                .insert({"user_id": user_id, **fields})\
                .execute()
        except Exception as e:
            logger.error(f"Error creating {self.table_name} for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Could not create {self.label}")
        if not result.data:
            raise HTTPException(status_code=500, detail=f"Could not create {self.label}")
        return result.data[0]

    def update(self, user_id: str, record_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        # null means "leave unchanged"; it is never written
        update_data = {key: value for key, value in fields.items() if value is not None}
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        update_data["updated_at"] = utc_now_iso()
        try:
            result = self.supabase.table(self.table_name)\
                .update(update_data)\
                .eq("id", record_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating {self.table_name} {record_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Could not update {self.label}")
        if not result.data:
            raise self.not_found()
        return result.data[0]

    def delete(self, user_id: str, record_id: str) -> None:
        try:
            result = self.supabase.table(self.table_name)\
                .delete()\
                .eq("id", record_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting {self.table_name} {record_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Could not delete {self.label}")
        if not result.data:
            raise self.not_found()

    def not_found(self, detail: Optional[str] = None) -> HTTPException:
        return HTTPException(
            status_code=404,
            detail=detail or f"{self.label.capitalize()} not found or you do not have permission to access it"
        )
