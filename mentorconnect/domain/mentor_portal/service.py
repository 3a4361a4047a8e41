"""Mentor portal service - dashboard figures and the mentor's own workspace"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import (
    Booking,
    BookingStatus,
    Mentor,
    MentorActivityLog,
    MentorAvailability,
    MentorEarning,
    MentorTask,
)
from ...utils.sanitization import sanitize_string
from ..bookings.lifecycle import normalize_status
from .repository import MentorPortalRepository
from .schemas import AvailabilitySlot, EarningCreate, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

# Requests that turned into a session, whatever stage it has reached
SESSION_STATUSES = (
    BookingStatus.ACCEPTED.value,
    BookingStatus.CONFIRMED.value,
    BookingStatus.COMPLETED.value,
)


class MentorPortalService:
    """Service layer for the mentor portal; every call is scoped to one mentor"""

    def __init__(self, db: Session, mentor: Mentor):
        self.db = db
        self.mentor = mentor
        self.repo = MentorPortalRepository()

    def _check_booking(self, booking_id: Optional[str]) -> None:
        if booking_id and not self.repo.get_booking(self.db, self.mentor.id, booking_id):
            raise HTTPException(status_code=404, detail="Booking not found")

    # Bookings

    def get_bookings(self, status: Optional[str] = None) -> list[Booking]:
        status_filter = None
        if status:
            normalized = normalize_status(status)
            if normalized is None:
                raise HTTPException(status_code=400, detail=f"Unknown booking status '{status}'")
            status_filter = normalized.value
        return self.repo.get_bookings(self.db, self.mentor.id, status_filter)

    def get_dashboard(self) -> dict:
        counts = self.repo.count_bookings_by_status(self.db, self.mentor.id)
        current_month = datetime.utcnow().strftime("%Y-%m")

        return {
            "totalSessions": sum(counts.get(s, 0) for s in SESSION_STATUSES),
            "completedSessions": counts.get(BookingStatus.COMPLETED.value, 0),
            "pendingBookings": counts.get(BookingStatus.PENDING.value, 0),
            "averageRating": self.mentor.average_rating or 0.0,
            "feedbackCount": self.mentor.total_ratings or 0,
            "totalEarnings": self.repo.sum_earnings(self.db, self.mentor.id),
            "monthlyEarnings": self.repo.sum_earnings(self.db, self.mentor.id, current_month),
        }

    def get_feedback(self) -> list[dict]:
        return [
            {
                "bookingId": b.id,
                "menteeName": b.mentee.name if b.mentee else None,
                "rating": b.mentee_rating,
                "feedback": b.mentee_feedback,
                "ratedAt": b.mentee_rated_at,
            }
            for b in self.repo.get_rated_bookings(self.db, self.mentor.id)
        ]

    # Tasks

    def get_tasks(self, status: Optional[str] = None) -> list[MentorTask]:
        return self.repo.get_tasks(self.db, self.mentor.id, status)

    def get_task(self, task_id: str) -> MentorTask:
        task = self.repo.get_task(self.db, self.mentor.id, task_id)
        if not task:
            raise HTTPException(status_code=404, detail="Task not found")
        return task

    def create_task(self, data: TaskCreate) -> MentorTask:
        self._check_booking(data.booking_id)
        task_data = data.model_dump()
        task_data["title"] = sanitize_string(task_data["title"])
        task_data["description"] = sanitize_string(task_data.get("description"))
        task = self.repo.create_task(self.db, self.mentor.id, **task_data)
        logger.info(f"Task {task.id} created for mentor {self.mentor.id}")
        return task

    def update_task(self, task_id: str, data: TaskUpdate) -> MentorTask:
        task = self.get_task(task_id)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("title") is not None:
            if not updates["title"].strip():
                raise HTTPException(status_code=400, detail="Title is required")
            updates["title"] = sanitize_string(updates["title"].strip())
        elif "title" in updates:
            del updates["title"]
        if "description" in updates:
            updates["description"] = sanitize_string(updates["description"])
        return self.repo.update_task(self.db, task, **updates)

    def delete_task(self, task_id: str) -> None:
        self.repo.delete_task(self.db, self.get_task(task_id))

    # Availability

    def get_availability(self) -> list[MentorAvailability]:
        return self.repo.get_availability(self.db, self.mentor.id)

    def replace_availability(self, slots: list[AvailabilitySlot]) -> list[MentorAvailability]:
        """Replace the weekly schedule in a single transaction"""
        try:
            self.repo.replace_availability(
                self.db, self.mentor.id, [slot.model_dump() for slot in slots]
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Failed to save availability for mentor {self.mentor.id}: {str(e)}")
            logger.exception(e)
            raise HTTPException(status_code=500, detail="Failed to save availability")

        logger.info(f"Mentor {self.mentor.id} availability replaced ({len(slots)} slots)")
        return self.get_availability()

    # Earnings

    def get_earnings(self) -> list[MentorEarning]:
        return self.repo.get_earnings(self.db, self.mentor.id)

    def create_earning(self, data: EarningCreate) -> MentorEarning:
        self._check_booking(data.booking_id)
        earning = self.repo.create_earning(
            self.db,
            self.mentor.id,
            amount=data.amount,
            currency=data.currency,
            booking_id=data.booking_id,
            payout_month=data.payout_month or datetime.utcnow().strftime("%Y-%m"),
        )
        logger.info(f"Earning {earning.id} recorded for mentor {self.mentor.id}")
        return earning

    def set_payout_status(self, earning_id: str, payout_status: str) -> MentorEarning:
        earning = self.repo.get_earning(self.db, self.mentor.id, earning_id)
        if not earning:
            raise HTTPException(status_code=404, detail="Earning not found")
        earning.payout_status = payout_status
        self.db.commit()
        self.db.refresh(earning)
        return earning

    # Activity

    def get_activity(self, limit: int = 20) -> list[MentorActivityLog]:
        return self.repo.get_activity(self.db, self.mentor.id, limit)
