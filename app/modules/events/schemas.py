from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    description: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    date: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None


class EventResponse(BaseModel):
    id: str
    user_id: str
    title: str
    date: str
    description: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
