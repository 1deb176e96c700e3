from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PhotoUpdate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None


class PhotoResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    url: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
