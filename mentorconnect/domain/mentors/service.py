"""Mentor service - Business logic for mentor profiles"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import ensure_same_email
from ...models import Booking, Mentor, User
from ...utils.sanitization import sanitize_string
from .repository import MentorRepository
from .schemas import MentorCreate, MentorUpdate

logger = logging.getLogger(__name__)


class MentorService:
    """Service layer for mentor business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MentorRepository()

    def list_mentors(
        self,
        search: Optional[str] = None,
        expertise: Optional[str] = None,
        industry: Optional[str] = None,
        language: Optional[str] = None,
        available: Optional[bool] = None,
    ) -> list[Mentor]:
        return self.repo.search_mentors(
            self.db,
            search=search or None,
            expertise=expertise or None,
            industry=industry or None,
            language=language or None,
            available=available,
        )

    def get_mentor(self, mentor_id: str) -> Mentor:
        mentor = self.repo.get_mentor_by_id(self.db, mentor_id)
        if not mentor:
            raise HTTPException(status_code=404, detail="Mentor not found")
        return mentor

    def get_mentor_by_email(self, email: str) -> Mentor:
        mentor = self.repo.get_mentor_by_email(self.db, email)
        if not mentor:
            raise HTTPException(status_code=404, detail="Mentor not found")
        return mentor

    def get_mentor_bookings(self, mentor_id: str, user: User) -> list[Booking]:
        mentor = self.get_mentor(mentor_id)
        ensure_same_email(user, mentor.email, "You can only view your own bookings")
        return self.repo.get_mentor_bookings(self.db, mentor_id)

    def create_mentor(self, data: MentorCreate) -> Mentor:
        """Create a mentor profile during onboarding"""
        if self.repo.get_mentor_by_email(self.db, data.email):
            raise HTTPException(status_code=409, detail="Mentor with this email already exists")

        mentor_data = data.model_dump()
        mentor_data["bio"] = sanitize_string(mentor_data.get("bio"))
        if data.comms_owner != "assistant":
            mentor_data["assistant_email"] = None

        mentor = self.repo.create_mentor(self.db, **mentor_data)
        logger.info(f"Mentor {mentor.id} onboarded ({mentor.email})")
        return mentor

    def update_mentor(self, mentor_id: str, data: MentorUpdate, user: User) -> Mentor:
        mentor = self.get_mentor(mentor_id)
        ensure_same_email(user, mentor.email, "You can only edit your own mentor profile")

        updates = data.model_dump(exclude_unset=True)
        if "bio" in updates:
            updates["bio"] = sanitize_string(updates["bio"])

        comms_owner = updates.get("comms_owner", mentor.comms_owner)
        assistant_email = updates.get("assistant_email", mentor.assistant_email)
        if comms_owner == "assistant" and not assistant_email:
            raise HTTPException(
                status_code=400,
                detail="Assistant email is required when communication owner is 'Assistant'",
            )

        return self.repo.update_mentor(self.db, mentor, **updates)

    def set_availability(self, mentor_id: str, is_available: bool, user: User) -> Mentor:
        mentor = self.get_mentor(mentor_id)
        ensure_same_email(user, mentor.email, "You can only change your own availability")

        mentor.is_available = is_available
        self.db.commit()
        self.db.refresh(mentor)
        logger.info(f"Mentor {mentor_id} availability set to {is_available}")
        return mentor
