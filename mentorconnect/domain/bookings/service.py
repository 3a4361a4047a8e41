"""Booking service - lifecycle transitions and their side effects"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...email_service import send_booking_accepted_email
from ...models import Booking, BookingStatus, Mentee, Mentor, NotificationType, User, UserRole
from ...utils.sanitization import sanitize_string
from ..mentor_portal import activity
from ..notifications import notify, send_email_best_effort
from ..ratings import recompute_mentor_rating
from .lifecycle import normalize_status, sources_for, validate_status_transition
from .repository import BookingRepository
from .schemas import BookingRequestCreate, FeedbackCreate, MentorFeedbackCreate

logger = logging.getLogger(__name__)

# Defaults for mentees created implicitly by a booking or a calendar event
DEFAULT_MENTEE_PROFILE = {
    "user_type": "individual",
    "timezone": "UTC",
    "languages_spoken": ["English"],
    "areas_exploring": ["Career Development"],
}


def participant_role(booking: Booking, user: User) -> Optional[str]:
    """Which side of the booking the user is on, or None for outsiders"""
    email = user.email.lower()
    if user.role == UserRole.MENTOR.value and booking.mentor and booking.mentor.email == email:
        return UserRole.MENTOR.value
    if user.role == UserRole.MENTEE.value and booking.mentee and booking.mentee.email == email:
        return UserRole.MENTEE.value
    return None


class BookingService:
    """Service layer for the booking lifecycle"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _commit(self, action: str) -> None:
        """Commit the unit of work, turning unexpected database errors into a 500"""
        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Failed to {action}: {str(e)}")
            logger.exception(e)
            raise HTTPException(status_code=500, detail=f"Failed to {action}")

    def _reject(self, status_code: int, detail: str):
        # Drop anything staged before the precondition failed
        self.db.rollback()
        raise HTTPException(status_code=status_code, detail=detail)

    def _get_or_create_mentee(self, email: str, name: Optional[str]) -> Mentee:
        mentee = self.repo.get_mentee_by_email(self.db, email)
        if mentee:
            return mentee

        mentee = self.repo.create_mentee(
            self.db,
            name=name or email.split("@")[0],
            email=email.lower(),
            **DEFAULT_MENTEE_PROFILE,
        )
        logger.info(f"Created mentee {mentee.id} for {mentee.email}")
        return mentee

    def _resolve_mentee(self, data: BookingRequestCreate, user: Optional[User]) -> Mentee:
        """
        Work out who is asking for the session.

        A mentee session always wins over identity fields in the request body.
        """
        if user is not None and user.role == UserRole.MENTEE.value:
            return self._get_or_create_mentee(user.email, user.full_name or data.mentee_name)

        if data.mentee_id:
            mentee = self.repo.get_mentee_by_id(self.db, data.mentee_id)
            if not mentee:
                raise HTTPException(status_code=404, detail="Mentee not found")
            return mentee

        if data.mentee_email:
            return self._get_or_create_mentee(data.mentee_email, data.mentee_name)

        raise HTTPException(status_code=400, detail="mentee_email or mentee_id is required")

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    def _get_mentor_booking(self, booking_id: str, mentor: Mentor) -> Booking:
        booking = self.get_booking(booking_id)
        if booking.mentor_id != mentor.id:
            logger.warning(f"Mentor {mentor.id} tried to act on booking {booking_id}")
            raise HTTPException(status_code=403, detail="This booking belongs to another mentor")
        return booking

    def _reload(self, booking: Booking) -> Booking:
        self.db.refresh(booking)
        return booking

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_bookings(self, user: User, status: Optional[str] = None) -> list[Booking]:
        """Bookings visible to the signed-in user"""
        status_filter = None
        if status:
            normalized = normalize_status(status)
            if normalized is None:
                raise HTTPException(status_code=400, detail=f"Unknown booking status '{status}'")
            status_filter = normalized.value

        if user.role == UserRole.MENTOR.value:
            mentor = self.db.query(Mentor).filter(Mentor.email == user.email).first()
            if not mentor:
                return []
            return self.repo.get_bookings(self.db, mentor_id=mentor.id, status=status_filter)

        mentee = self.repo.get_mentee_by_email(self.db, user.email)
        if not mentee:
            return []
        return self.repo.get_bookings(self.db, mentee_id=mentee.id, status=status_filter)

    def get_booking_for_user(self, booking_id: str, user: User) -> Booking:
        booking = self.get_booking(booking_id)
        if participant_role(booking, user) is None:
            raise HTTPException(status_code=403, detail="You are not a participant in this booking")
        return booking

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_request(self, data: BookingRequestCreate, user: Optional[User] = None) -> Booking:
        """Create a pending booking and tell the mentor about it"""
        mentor = self.repo.get_mentor(self.db, data.mentor_id)
        if not mentor:
            raise HTTPException(status_code=404, detail="Mentor not found")

        try:
            mentee = self._resolve_mentee(data, user)
            goal = sanitize_string(data.goal.strip()) if data.goal else None

            booking = self.repo.create_booking(
                self.db,
                mentor_id=mentor.id,
                mentee_id=mentee.id,
                status=BookingStatus.PENDING.value,
                goal=goal,
                clicked_at=datetime.utcnow(),
            )

            message = f"{mentee.name} has requested a mentorship session."
            if goal:
                message += f" Goal: {goal}"
            notify(
                self.db,
                recipient_email=mentor.email,
                recipient_type=UserRole.MENTOR.value,
                notification_type=NotificationType.BOOKING_REQUEST,
                title="New booking request",
                message=message,
                booking_id=booking.id,
            )
            activity.log_activity(
                self.db,
                mentor.id,
                activity.BOOKING_REQUESTED,
                f"Booking request from {mentee.name}",
                booking.id,
            )
        except HTTPException:
            self.db.rollback()
            raise

        self._commit("create booking request")
        logger.info(f"✅ Booking {booking.id} requested: mentee {mentee.id} -> mentor {mentor.id}")
        return self._reload(booking)

    # ------------------------------------------------------------------
    # Mentor decisions
    # ------------------------------------------------------------------

    async def accept(self, booking_id: str, mentor: Mentor) -> Booking:
        """
        Accept a pending request.

        The mentee is notified in-app within the same transaction and, once it
        has committed, emailed the mentor's calendar link. Email failures never
        undo the acceptance.
        """
        booking = self._get_mentor_booking(booking_id, mentor)
        now = datetime.utcnow()

        if not self.repo.transition_status(
            self.db, booking.id, [BookingStatus.PENDING], BookingStatus.ACCEPTED, accepted_at=now
        ):
            self._reject(400, f"Only pending bookings can be accepted (status: {booking.status})")

        mentee = booking.mentee
        notify(
            self.db,
            recipient_email=mentee.email,
            recipient_type=UserRole.MENTEE.value,
            notification_type=NotificationType.BOOKING_ACCEPTED,
            title="Booking accepted",
            message=f"{mentor.name} accepted your mentorship request. Pick a time to meet.",
            booking_id=booking.id,
        )
        activity.log_activity(
            self.db,
            mentor.id,
            activity.BOOKING_ACCEPTED,
            f"Accepted booking request from {mentee.name}",
            booking.id,
        )
        self._commit("accept booking")
        booking = self._reload(booking)
        logger.info(f"✅ Booking {booking.id} accepted by mentor {mentor.id}")

        await send_email_best_effort(
            "Booking accepted",
            send_booking_accepted_email,
            to=mentee.email,
            mentee_name=mentee.name,
            mentor_name=mentor.name,
            calendar_link=mentor.calendly_link,
            goal=booking.goal,
        )
        return booking

    def decline(self, booking_id: str, mentor: Mentor) -> Booking:
        booking = self._get_mentor_booking(booking_id, mentor)

        if not self.repo.transition_status(
            self.db, booking.id, [BookingStatus.PENDING], BookingStatus.REJECTED
        ):
            self._reject(400, f"Only pending bookings can be declined (status: {booking.status})")

        mentee = booking.mentee
        notify(
            self.db,
            recipient_email=mentee.email,
            recipient_type=UserRole.MENTEE.value,
            notification_type=NotificationType.BOOKING_REJECTED,
            title="Booking declined",
            message=f"{mentor.name} is unable to take your request right now.",
            booking_id=booking.id,
        )
        activity.log_activity(
            self.db,
            mentor.id,
            activity.BOOKING_DECLINED,
            f"Declined booking request from {mentee.name}",
            booking.id,
        )
        self._commit("decline booking")
        logger.info(f"Booking {booking.id} declined by mentor {mentor.id}")
        return self._reload(booking)

    async def update_status(self, booking_id: str, status: str, mentor: Mentor) -> Booking:
        """
        Generic status change used by the booking and mentor portal endpoints.

        accepted/rejected go through the full accept/decline paths; completion
        and cancellation only persist the new status and its timestamp.
        """
        target = normalize_status(status)
        if target == BookingStatus.ACCEPTED:
            return await self.accept(booking_id, mentor)
        if target == BookingStatus.REJECTED:
            return self.decline(booking_id, mentor)

        booking = self._get_mentor_booking(booking_id, mentor)
        if target == BookingStatus.COMPLETED:
            stamp = {"completed_at": datetime.utcnow()}
        elif target == BookingStatus.CANCELED:
            stamp = {"canceled_at": datetime.utcnow()}
        else:
            raise HTTPException(status_code=400, detail=f"Unsupported status '{status}'")

        if not validate_status_transition(booking.status, target.value):
            raise HTTPException(
                status_code=400,
                detail=f"Cannot change booking from '{booking.status}' to '{target.value}'",
            )

        # The row may still have moved since it was read
        if not self.repo.transition_status(
            self.db, booking.id, sources_for(target), target, **stamp
        ):
            self._reject(
                400, f"Cannot change booking from '{booking.status}' to '{target.value}'"
            )

        self._commit(f"mark booking {target.value}")
        logger.info(f"Booking {booking.id} marked {target.value} by mentor {mentor.id}")
        return self._reload(booking)

    # ------------------------------------------------------------------
    # Calendar events
    # ------------------------------------------------------------------

    def confirm_from_calendar(
        self,
        mentor_id: str,
        mentee_id: Optional[str] = None,
        mentee_email: Optional[str] = None,
        mentee_name: Optional[str] = None,
        scheduled_at: Optional[datetime] = None,
        cal_event_uri: Optional[str] = None,
    ) -> tuple[Booking, bool]:
        """
        Record a scheduled session.

        Confirms the pair's most recent accepted booking, or creates a confirmed
        booking when the mentee scheduled without going through a request.
        Returns (booking, created). A repeated event uid returns the booking it
        already produced.
        """
        if cal_event_uri:
            existing = self.repo.get_booking_by_cal_event_uri(self.db, cal_event_uri)
            if existing:
                logger.info(f"Calendar event {cal_event_uri} already processed, ignoring")
                return existing, False

        mentor = self.repo.get_mentor(self.db, mentor_id)
        if not mentor:
            raise HTTPException(status_code=404, detail="Mentor not found")

        if mentee_id:
            mentee = self.repo.get_mentee_by_id(self.db, mentee_id)
            if not mentee:
                raise HTTPException(status_code=404, detail="Mentee not found")
        elif mentee_email:
            mentee = self._get_or_create_mentee(mentee_email, mentee_name)
        else:
            raise HTTPException(status_code=400, detail="Mentee email or id is required")

        now = datetime.utcnow()
        fields = {
            "scheduled_at": scheduled_at or now,
            "cal_event_uri": cal_event_uri,
            "confirmed_at": now,
        }

        created = False
        booking = self.repo.find_latest_accepted(self.db, mentor.id, mentee.id)
        if booking is None or not self.repo.transition_status(
            self.db, booking.id, [BookingStatus.ACCEPTED], BookingStatus.CONFIRMED, **fields
        ):
            booking = self.repo.create_booking(
                self.db,
                mentor_id=mentor.id,
                mentee_id=mentee.id,
                status=BookingStatus.CONFIRMED.value,
                **fields,
            )
            created = True

        when = fields["scheduled_at"].strftime("%Y-%m-%d %H:%M UTC")
        notify(
            self.db,
            recipient_email=mentor.email,
            recipient_type=UserRole.MENTOR.value,
            notification_type=NotificationType.BOOKING_CONFIRMED,
            title="Session scheduled",
            message=f"Your session with {mentee.name} is booked for {when}.",
            booking_id=booking.id,
        )
        notify(
            self.db,
            recipient_email=mentee.email,
            recipient_type=UserRole.MENTEE.value,
            notification_type=NotificationType.BOOKING_CONFIRMED,
            title="Session scheduled",
            message=f"Your session with {mentor.name} is booked for {when}.",
            booking_id=booking.id,
        )
        activity.log_activity(
            self.db,
            mentor.id,
            activity.BOOKING_CONFIRMED,
            f"Session with {mentee.name} scheduled for {when}",
            booking.id,
        )
        self._commit("confirm booking")
        logger.info(
            f"✅ Booking {booking.id} confirmed for mentor {mentor.id} "
            f"({'created' if created else 'from accepted request'})"
        )
        return self._reload(booking), created

    def cancel_from_calendar(self, cal_event_uri: str) -> Optional[Booking]:
        """Cancel the booking holding a calendar event; None when nothing changed"""
        booking = self.repo.get_booking_by_cal_event_uri(self.db, cal_event_uri)
        if not booking:
            logger.info(f"No booking for cancelled calendar event {cal_event_uri}")
            return None

        if not self.repo.transition_status(
            self.db,
            booking.id,
            sources_for(BookingStatus.CANCELED),
            BookingStatus.CANCELED,
            canceled_at=datetime.utcnow(),
        ):
            self.db.rollback()
            logger.info(f"Booking {booking.id} already {booking.status}, cancellation ignored")
            return None

        self._commit("cancel booking")
        logger.info(f"Booking {booking.id} canceled from calendar")
        return self._reload(booking)

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    def submit_mentee_feedback(self, booking_id: str, data: FeedbackCreate, mentee: Mentee) -> Booking:
        """Mentee rates the mentor; the mentor's aggregate is recomputed in the same commit"""
        booking = self.get_booking(booking_id)
        if booking.mentee_id != mentee.id:
            raise HTTPException(status_code=403, detail="You can only rate your own sessions")

        feedback = sanitize_string(data.feedback) if data.feedback else None
        if not self.repo.set_mentee_feedback(
            self.db, booking.id, data.rating, feedback, datetime.utcnow()
        ):
            self._reject(409, "Feedback has already been submitted for this booking")

        mentor = recompute_mentor_rating(self.db, booking.mentor_id)
        notify(
            self.db,
            recipient_email=mentor.email,
            recipient_type=UserRole.MENTOR.value,
            notification_type=NotificationType.FEEDBACK_RECEIVED,
            title="New feedback received",
            message=f"{mentee.name} rated your session {data.rating}/5.",
            booking_id=booking.id,
        )
        activity.log_activity(
            self.db,
            mentor.id,
            activity.FEEDBACK_RECEIVED,
            f"Received a {data.rating}-star rating from {mentee.name}",
            booking.id,
        )
        self._commit("submit feedback")
        logger.info(f"Mentee feedback stored for booking {booking.id}")
        return self._reload(booking)

    def submit_mentor_feedback(
        self, booking_id: str, data: MentorFeedbackCreate, mentor: Mentor
    ) -> Booking:
        """Mentor rates the mentee; mentees carry no aggregate"""
        booking = self._get_mentor_booking(booking_id, mentor)
        if data.mentor_email and data.mentor_email.strip().lower() != mentor.email:
            raise HTTPException(status_code=403, detail="Mentor email does not match this booking")

        feedback = sanitize_string(data.feedback) if data.feedback else None
        if not self.repo.set_mentor_feedback(
            self.db, booking.id, data.rating, feedback, datetime.utcnow()
        ):
            self._reject(409, "Mentor feedback has already been submitted for this booking")

        mentee = booking.mentee
        notify(
            self.db,
            recipient_email=mentee.email,
            recipient_type=UserRole.MENTEE.value,
            notification_type=NotificationType.MENTOR_FEEDBACK,
            title="Your mentor left feedback",
            message=f"{mentor.name} shared feedback on your session.",
            booking_id=booking.id,
        )
        activity.log_activity(
            self.db,
            mentor.id,
            activity.FEEDBACK_GIVEN,
            f"Left feedback for {mentee.name}",
            booking.id,
        )
        self._commit("submit mentor feedback")
        return self._reload(booking)
