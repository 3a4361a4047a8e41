"""Mentee repository - Database operations for mentees and their favorites"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Booking, Mentee, MenteeFavorite, Mentor


class MenteeRepository:
    """Repository for mentee database operations"""

    @staticmethod
    def get_mentee_by_id(db: Session, mentee_id: str) -> Optional[Mentee]:
        return db.query(Mentee).filter(Mentee.id == mentee_id).first()

    @staticmethod
    def get_mentee_by_email(db: Session, email: str) -> Optional[Mentee]:
        return db.query(Mentee).filter(Mentee.email == email.strip().lower()).first()

    @staticmethod
    def create_mentee(db: Session, **mentee_data) -> Mentee:
        mentee = Mentee(**mentee_data)
        db.add(mentee)
        db.commit()
        db.refresh(mentee)
        return mentee

    @staticmethod
    def update_mentee(db: Session, mentee: Mentee, **updates) -> Mentee:
        """Update a mentee with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(mentee, key):
                setattr(mentee, key, value)

        db.commit()
        db.refresh(mentee)
        return mentee

    @staticmethod
    def get_mentee_bookings(db: Session, mentee_id: str) -> list[Booking]:
        return (
            db.query(Booking)
            .filter(Booking.mentee_id == mentee_id)
            .order_by(Booking.created_at.desc())
            .all()
        )

    @staticmethod
    def get_favorites(db: Session, mentee_id: str) -> list[MenteeFavorite]:
        return (
            db.query(MenteeFavorite)
            .options(joinedload(MenteeFavorite.mentor))
            .filter(MenteeFavorite.mentee_id == mentee_id)
            .order_by(MenteeFavorite.created_at.desc())
            .all()
        )

    @staticmethod
    def get_favorite(db: Session, mentee_id: str, mentor_id: str) -> Optional[MenteeFavorite]:
        return (
            db.query(MenteeFavorite)
            .filter(MenteeFavorite.mentee_id == mentee_id, MenteeFavorite.mentor_id == mentor_id)
            .first()
        )

    @staticmethod
    def add_favorite(db: Session, mentee_id: str, mentor_id: str) -> MenteeFavorite:
        favorite = MenteeFavorite(mentee_id=mentee_id, mentor_id=mentor_id)
        db.add(favorite)
        db.commit()
        db.refresh(favorite)
        return favorite

    @staticmethod
    def delete_favorite(db: Session, favorite: MenteeFavorite) -> None:
        db.delete(favorite)
        db.commit()

    @staticmethod
    def get_mentor(db: Session, mentor_id: str) -> Optional[Mentor]:
        return db.query(Mentor).filter(Mentor.id == mentor_id).first()
