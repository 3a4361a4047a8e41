"""Booking notes router"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import NoteCreate, NoteResponse, NoteUpdate
from .service import NoteService

router = APIRouter(prefix="/api/bookings/{booking_id}/notes", tags=["Booking Notes"])


def get_note_service(db: Session = Depends(get_db)) -> NoteService:
    """Dependency injection for NoteService"""
    return NoteService(db)


@router.get("", response_model=list[NoteResponse])
async def get_notes(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return service.list_notes(booking_id, current_user)


@router.post("", response_model=NoteResponse, status_code=201)
async def create_note(
    booking_id: str,
    data: NoteCreate,
    current_user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return service.create_note(booking_id, data, current_user)


@router.patch("/{note_id}", response_model=NoteResponse)
async def update_note(
    booking_id: str,
    note_id: str,
    data: NoteUpdate,
    current_user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return service.update_note(booking_id, note_id, data, current_user)


@router.delete("/{note_id}", status_code=204)
async def delete_note(
    booking_id: str,
    note_id: str,
    current_user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    service.delete_note(booking_id, note_id, current_user)
    return Response(status_code=204)
