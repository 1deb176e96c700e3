from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.events.schemas import EventCreate, EventUpdate, EventResponse
from app.modules.events.service import EventService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(supabase: Client = Depends(get_supabase)) -> EventService:
    return EventService(supabase)


@router.get("", response_model=List[EventResponse])
async def list_events(
    user_data: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    """List the caller's events, soonest first"""
    return service.list(user_data["id"])


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    event_data: EventCreate,
    user_data: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    return service.create(user_data["id"], event_data.model_dump())


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    user_data: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    return service.update(user_data["id"], event_id, event_data.model_dump(exclude_unset=True))


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: str,
    user_data: Dict = Depends(get_current_user),
    service: EventService = Depends(get_event_service)
):
    service.delete(user_data["id"], event_id)
    return None
