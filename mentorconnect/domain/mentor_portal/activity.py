"""Mentor activity log - audit trail shown on the mentor dashboard"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import MentorActivityLog

logger = logging.getLogger(__name__)

BOOKING_REQUESTED = "booking_requested"
BOOKING_ACCEPTED = "booking_accepted"
BOOKING_DECLINED = "booking_declined"
BOOKING_CONFIRMED = "booking_confirmed"
FEEDBACK_RECEIVED = "feedback_received"
FEEDBACK_GIVEN = "feedback_given"


def log_activity(
    db: Session,
    mentor_id: str,
    activity_type: str,
    description: str,
    booking_id: Optional[str] = None,
) -> MentorActivityLog:
    """Stage an activity entry in the caller's unit of work"""
    entry = MentorActivityLog(
        mentor_id=mentor_id,
        activity_type=activity_type,
        description=description,
        booking_id=booking_id,
    )
    db.add(entry)
    db.flush()
    logger.debug(f"Activity {activity_type} logged for mentor {mentor_id}")
    return entry
