"""Booking notes - shared notes and action items between the two participants"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Booking, BookingNote, User
from ...utils.sanitization import sanitize_string
from ..bookings.service import participant_role
from .schemas import NoteCreate, NoteUpdate

logger = logging.getLogger(__name__)


class NoteService:
    def __init__(self, db: Session):
        self.db = db

    def _get_booking(self, booking_id: str, user: User) -> tuple[Booking, str]:
        booking = self.db.query(Booking).filter(Booking.id == booking_id).first()
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")

        role = participant_role(booking, user)
        if role is None:
            raise HTTPException(status_code=403, detail="You are not a participant in this booking")
        return booking, role

    def _get_note(self, booking_id: str, note_id: str, user: User) -> BookingNote:
        self._get_booking(booking_id, user)
        note = (
            self.db.query(BookingNote)
            .filter(BookingNote.id == note_id, BookingNote.booking_id == booking_id)
            .first()
        )
        if not note:
            raise HTTPException(status_code=404, detail="Note not found")
        return note

    def list_notes(self, booking_id: str, user: User) -> list[BookingNote]:
        self._get_booking(booking_id, user)
        return (
            self.db.query(BookingNote)
            .filter(BookingNote.booking_id == booking_id)
            .order_by(BookingNote.created_at.asc())
            .all()
        )

    def create_note(self, booking_id: str, data: NoteCreate, user: User) -> BookingNote:
        booking, role = self._get_booking(booking_id, user)
        note = BookingNote(
            booking_id=booking.id,
            author_email=user.email,
            author_type=role,
            note_type=data.note_type,
            content=sanitize_string(data.content),
        )
        self.db.add(note)
        self.db.commit()
        self.db.refresh(note)
        logger.info(f"{role.capitalize()} added a {data.note_type} to booking {booking.id}")
        return note

    def update_note(self, booking_id: str, note_id: str, data: NoteUpdate, user: User) -> BookingNote:
        """Either participant may tick off a task; only the author may reword it"""
        note = self._get_note(booking_id, note_id, user)

        if data.content is not None:
            if note.author_email != user.email:
                raise HTTPException(status_code=403, detail="Only the author can edit this note")
            if not data.content.strip():
                raise HTTPException(status_code=400, detail="Note content cannot be empty")
            note.content = sanitize_string(data.content.strip())

        if data.is_completed is not None:
            note.is_completed = data.is_completed

        self.db.commit()
        self.db.refresh(note)
        return note

    def delete_note(self, booking_id: str, note_id: str, user: User) -> None:
        note = self._get_note(booking_id, note_id, user)
        if note.author_email != user.email:
            raise HTTPException(status_code=403, detail="Only the author can delete this note")
        self.db.delete(note)
        self.db.commit()
