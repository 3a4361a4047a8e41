"""Mentor portal repository - Database operations behind the mentor dashboard"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import (
    Booking,
    MentorActivityLog,
    MentorAvailability,
    MentorEarning,
    MentorTask,
)


class MentorPortalRepository:
    """Repository for mentor portal database operations"""

    # Bookings and feedback

    @staticmethod
    def get_bookings(db: Session, mentor_id: str, status: Optional[str] = None) -> list[Booking]:
        query = db.query(Booking).filter(Booking.mentor_id == mentor_id)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.created_at.desc()).all()

    @staticmethod
    def get_booking(db: Session, mentor_id: str, booking_id: str) -> Optional[Booking]:
        return (
            db.query(Booking)
            .filter(Booking.id == booking_id, Booking.mentor_id == mentor_id)
            .first()
        )

    @staticmethod
    def count_bookings_by_status(db: Session, mentor_id: str) -> dict[str, int]:
        rows = (
            db.query(Booking.status, func.count(Booking.id))
            .filter(Booking.mentor_id == mentor_id)
            .group_by(Booking.status)
            .all()
        )
        return {status: count for status, count in rows}

    @staticmethod
    def get_rated_bookings(db: Session, mentor_id: str) -> list[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.mentee))
            .filter(Booking.mentor_id == mentor_id, Booking.mentee_rating.isnot(None))
            .order_by(Booking.mentee_rated_at.desc())
            .all()
        )

    # Tasks

    @staticmethod
    def get_tasks(db: Session, mentor_id: str, status: Optional[str] = None) -> list[MentorTask]:
        query = db.query(MentorTask).filter(MentorTask.mentor_id == mentor_id)
        if status:
            query = query.filter(MentorTask.status == status)
        return query.order_by(
            MentorTask.due_date.is_(None), MentorTask.due_date, MentorTask.created_at
        ).all()

    @staticmethod
    def get_task(db: Session, mentor_id: str, task_id: str) -> Optional[MentorTask]:
        return (
            db.query(MentorTask)
            .filter(MentorTask.id == task_id, MentorTask.mentor_id == mentor_id)
            .first()
        )

    @staticmethod
    def create_task(db: Session, mentor_id: str, **task_data) -> MentorTask:
        task = MentorTask(mentor_id=mentor_id, **task_data)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def update_task(db: Session, task: MentorTask, **updates) -> MentorTask:
        for key, value in updates.items():
            if hasattr(task, key):
                setattr(task, key, value)
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def delete_task(db: Session, task: MentorTask) -> None:
        db.delete(task)
        db.commit()

    # Availability

    @staticmethod
    def get_availability(db: Session, mentor_id: str) -> list[MentorAvailability]:
        return (
            db.query(MentorAvailability)
            .filter(MentorAvailability.mentor_id == mentor_id)
            .order_by(MentorAvailability.day_of_week, MentorAvailability.start_time)
            .all()
        )

    @staticmethod
    def replace_availability(db: Session, mentor_id: str, slots: list[dict]) -> None:
        """Swap the whole weekly schedule; the caller commits"""
        db.query(MentorAvailability).filter(MentorAvailability.mentor_id == mentor_id).delete(
            synchronize_session=False
        )
        db.add_all([MentorAvailability(mentor_id=mentor_id, **slot) for slot in slots])
        db.flush()

    # Earnings

    @staticmethod
    def get_earnings(db: Session, mentor_id: str) -> list[MentorEarning]:
        return (
            db.query(MentorEarning)
            .filter(MentorEarning.mentor_id == mentor_id)
            .order_by(MentorEarning.payout_month.desc(), MentorEarning.earned_at.desc())
            .all()
        )

    @staticmethod
    def get_earning(db: Session, mentor_id: str, earning_id: str) -> Optional[MentorEarning]:
        return (
            db.query(MentorEarning)
            .filter(MentorEarning.id == earning_id, MentorEarning.mentor_id == mentor_id)
            .first()
        )

    @staticmethod
    def create_earning(db: Session, mentor_id: str, **earning_data) -> MentorEarning:
        earning = MentorEarning(mentor_id=mentor_id, **earning_data)
        db.add(earning)
        db.commit()
        db.refresh(earning)
        return earning

    @staticmethod
    def sum_earnings(db: Session, mentor_id: str, payout_month: Optional[str] = None) -> float:
        query = db.query(func.coalesce(func.sum(MentorEarning.amount), 0)).filter(
            MentorEarning.mentor_id == mentor_id
        )
        if payout_month:
            query = query.filter(MentorEarning.payout_month == payout_month)
        return float(query.scalar() or 0)

    # Activity

    @staticmethod
    def get_activity(db: Session, mentor_id: str, limit: int = 20) -> list[MentorActivityLog]:
        return (
            db.query(MentorActivityLog)
            .filter(MentorActivityLog.mentor_id == mentor_id)
            .order_by(MentorActivityLog.created_at.desc())
            .limit(limit)
            .all()
        )
