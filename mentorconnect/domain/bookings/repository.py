"""Booking repository - Database operations for bookings"""

from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from ...models import Booking, BookingStatus, Mentee, Mentor


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_bookings(
        db: Session,
        mentor_id: Optional[str] = None,
        mentee_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[Booking]:
        query = db.query(Booking)
        if mentor_id:
            query = query.filter(Booking.mentor_id == mentor_id)
        if mentee_id:
            query = query.filter(Booking.mentee_id == mentee_id)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.created_at.desc()).all()

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_booking_by_cal_event_uri(db: Session, cal_event_uri: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.cal_event_uri == cal_event_uri).first()

    @staticmethod
    def find_latest_accepted(db: Session, mentor_id: str, mentee_id: str) -> Optional[Booking]:
        """Most recent accepted booking for the pair, the one a scheduled event confirms"""
        return (
            db.query(Booking)
            .filter(
                Booking.mentor_id == mentor_id,
                Booking.mentee_id == mentee_id,
                Booking.status == BookingStatus.ACCEPTED.value,
            )
            .order_by(Booking.accepted_at.desc(), Booking.created_at.desc())
            .first()
        )

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        """Stage a new booking in the current unit of work"""
        booking = Booking(**booking_data)
        db.add(booking)
        db.flush()
        return booking

    @staticmethod
    def transition_status(
        db: Session,
        booking_id: str,
        from_statuses: list[BookingStatus],
        to_status: BookingStatus,
        **fields,
    ) -> bool:
        """
        Compare-and-swap the booking status.

        The row only changes if its status is still one of ``from_statuses``;
        returns False when another request got there first.
        """
        result = db.execute(
            update(Booking)
            .where(
                Booking.id == booking_id,
                Booking.status.in_([s.value for s in from_statuses]),
            )
            .values(status=to_status.value, **fields)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def get_mentor(db: Session, mentor_id: str) -> Optional[Mentor]:
        return db.query(Mentor).filter(Mentor.id == mentor_id).first()

    @staticmethod
    def get_mentee_by_id(db: Session, mentee_id: str) -> Optional[Mentee]:
        return db.query(Mentee).filter(Mentee.id == mentee_id).first()

    @staticmethod
    def get_mentee_by_email(db: Session, email: str) -> Optional[Mentee]:
        return db.query(Mentee).filter(Mentee.email == email.lower()).first()

    @staticmethod
    def create_mentee(db: Session, **mentee_data) -> Mentee:
        mentee = Mentee(**mentee_data)
        db.add(mentee)
        db.flush()
        return mentee

    @staticmethod
    def set_mentee_feedback(db: Session, booking_id: str, rating: int, feedback, rated_at) -> bool:
        """Write the mentee side of the feedback unless it has already been written"""
        result = db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.mentee_rating.is_(None))
            .values(mentee_rating=rating, mentee_feedback=feedback, mentee_rated_at=rated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def set_mentor_feedback(db: Session, booking_id: str, rating: int, feedback, rated_at) -> bool:
        """Write the mentor side of the feedback unless it has already been written"""
        result = db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.mentor_rating.is_(None))
            .values(mentor_rating=rating, mentor_feedback=feedback, mentor_rated_at=rated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
