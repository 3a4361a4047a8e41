"""Mentee service - Business logic for mentee profiles and favorites"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import ensure_same_email
from ...models import Booking, Mentee, MenteeFavorite, User
from ...utils.sanitization import sanitize_string
from .repository import MenteeRepository
from .schemas import MenteeCreate, MenteeUpdate

logger = logging.getLogger(__name__)


class MenteeService:
    """Service layer for mentee business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MenteeRepository()

    def get_mentee_by_email(self, email: str) -> Mentee:
        mentee = self.repo.get_mentee_by_email(self.db, email)
        if not mentee:
            raise HTTPException(status_code=404, detail="Mentee not found")
        return mentee

    def _get_owned_mentee(self, email: str, user: User) -> Mentee:
        ensure_same_email(user, email, "You can only access your own mentee profile")
        return self.get_mentee_by_email(email)

    def create_mentee(self, data: MenteeCreate) -> Mentee:
        """Register a mentee profile"""
        if self.repo.get_mentee_by_email(self.db, data.email):
            raise HTTPException(status_code=409, detail="Mentee with this email already exists")

        mentee_data = data.model_dump()
        mentee_data["bio"] = sanitize_string(mentee_data.get("bio"))
        if data.user_type != "organization":
            mentee_data["organization_name"] = None

        mentee = self.repo.create_mentee(self.db, **mentee_data)
        logger.info(f"Mentee {mentee.id} registered ({mentee.email})")
        return mentee

    def update_mentee(self, mentee_id: str, data: MenteeUpdate, user: User) -> Mentee:
        mentee = self.repo.get_mentee_by_id(self.db, mentee_id)
        if not mentee:
            raise HTTPException(status_code=404, detail="Mentee not found")
        ensure_same_email(user, mentee.email, "You can only edit your own mentee profile")

        updates = data.model_dump(exclude_unset=True)
        if "bio" in updates:
            updates["bio"] = sanitize_string(updates["bio"])

        user_type = updates.get("user_type", mentee.user_type)
        organization_name = updates.get("organization_name", mentee.organization_name)
        if user_type == "organization" and not organization_name:
            raise HTTPException(
                status_code=400, detail="Organization name is required for organization accounts"
            )

        return self.repo.update_mentee(self.db, mentee, **updates)

    def get_mentee_bookings(self, email: str, user: User) -> list[Booking]:
        mentee = self._get_owned_mentee(email, user)
        return self.repo.get_mentee_bookings(self.db, mentee.id)

    # Favorites

    def get_favorites(self, email: str, user: User) -> list[MenteeFavorite]:
        mentee = self._get_owned_mentee(email, user)
        return self.repo.get_favorites(self.db, mentee.id)

    def add_favorite(self, email: str, mentor_id: str, user: User) -> MenteeFavorite:
        mentee = self._get_owned_mentee(email, user)
        if not self.repo.get_mentor(self.db, mentor_id):
            raise HTTPException(status_code=404, detail="Mentor not found")
        if self.repo.get_favorite(self.db, mentee.id, mentor_id):
            raise HTTPException(status_code=409, detail="Mentor is already in favorites")

        favorite = self.repo.add_favorite(self.db, mentee.id, mentor_id)
        logger.info(f"Mentee {mentee.id} saved mentor {mentor_id}")
        return favorite

    def remove_favorite(self, email: str, mentor_id: str, user: User) -> None:
        mentee = self._get_owned_mentee(email, user)
        favorite = self.repo.get_favorite(self.db, mentee.id, mentor_id)
        if not favorite:
            raise HTTPException(status_code=404, detail="Favorite not found")
        self.repo.delete_favorite(self.db, favorite)
