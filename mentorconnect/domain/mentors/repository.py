"""Mentor repository - Database operations for mentors"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Booking, Mentor


def _contains_ci(values: Optional[list], needle: str) -> bool:
    needle = needle.lower()
    return any(isinstance(v, str) and v.lower() == needle for v in values or [])


class MentorRepository:
    """Repository for mentor database operations"""

    @staticmethod
    def search_mentors(
        db: Session,
        search: Optional[str] = None,
        expertise: Optional[str] = None,
        industry: Optional[str] = None,
        language: Optional[str] = None,
        available: Optional[bool] = None,
    ) -> list[Mentor]:
        """Search and filter mentors"""
        query = db.query(Mentor)

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    Mentor.name.ilike(search_term),
                    Mentor.position.ilike(search_term),
                    Mentor.company.ilike(search_term),
                    Mentor.bio.ilike(search_term),
                )
            )

        if available is not None:
            query = query.filter(Mentor.is_available.is_(available))

        mentors = query.order_by(Mentor.name).all()

        # List attributes are JSON columns; membership is checked portably here
        if expertise:
            mentors = [m for m in mentors if _contains_ci(m.expertise, expertise)]
        if industry:
            mentors = [m for m in mentors if _contains_ci(m.industries, industry)]
        if language:
            mentors = [m for m in mentors if _contains_ci(m.languages_spoken, language)]

        return mentors

    @staticmethod
    def get_mentor_by_id(db: Session, mentor_id: str) -> Optional[Mentor]:
        return db.query(Mentor).filter(Mentor.id == mentor_id).first()

    @staticmethod
    def get_mentor_by_email(db: Session, email: str) -> Optional[Mentor]:
        return db.query(Mentor).filter(Mentor.email == email.lower()).first()

    @staticmethod
    def create_mentor(db: Session, **mentor_data) -> Mentor:
        mentor = Mentor(**mentor_data)
        db.add(mentor)
        db.commit()
        db.refresh(mentor)
        return mentor

    @staticmethod
    def update_mentor(db: Session, mentor: Mentor, **updates) -> Mentor:
        """Update a mentor with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(mentor, key):
                setattr(mentor, key, value)

        db.commit()
        db.refresh(mentor)
        return mentor

    @staticmethod
    def get_mentor_bookings(db: Session, mentor_id: str, status: Optional[str] = None) -> list[Booking]:
        query = db.query(Booking).filter(Booking.mentor_id == mentor_id)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.created_at.desc()).all()
