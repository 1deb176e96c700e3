from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.notes.schemas import NoteCreate, NoteUpdate, NoteResponse
from app.modules.notes.service import NoteService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/notes", tags=["notes"])


def get_note_service(supabase: Client = Depends(get_supabase)) -> NoteService:
    return NoteService(supabase)


@router.get("", response_model=List[NoteResponse])
async def list_notes(
    user_data: Dict = Depends(get_current_user),
    service: NoteService = Depends(get_note_service)
):
    return service.list(user_data["id"])


@router.post("", response_model=NoteResponse, status_code=201)
async def create_note(
    note_data: NoteCreate,
    user_data: Dict = Depends(get_current_user),
    service: NoteService = Depends(get_note_service)
):
    return service.create(user_data["id"], note_data.model_dump())


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    note_data: NoteUpdate,
    user_data: Dict = Depends(get_current_user),
    service: NoteService = Depends(get_note_service)
):
    return service.update(user_data["id"], note_id, note_data.model_dump(exclude_unset=True))


@router.delete("/{note_id}", status_code=204)
async def delete_note(
    note_id: str,
    user_data: Dict = Depends(get_current_user),
    service: NoteService = Depends(get_note_service)
):
    service.delete(user_data["id"], note_id)
    return None
