"""
Rating aggregation

A mentor's ``average_rating`` and ``total_ratings`` are derived data: they are
always recomputed from scratch out of the bookings table rather than adjusted
incrementally, so the stored values cannot drift from the feedback rows.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Mentor
from .repository import RatingRepository

logger = logging.getLogger(__name__)


def recompute_mentor_rating(db: Session, mentor_id: str) -> Optional[Mentor]:
    """
    Recompute the mentor aggregate inside the caller's unit of work.

    Returns the updated mentor, or None if the mentor does not exist.
    """
    mentor = db.query(Mentor).filter(Mentor.id == mentor_id).first()
    if not mentor:
        logger.warning(f"Rating recompute requested for unknown mentor {mentor_id}")
        return None

    average, total = RatingRepository.get_mentee_rating_stats(db, mentor_id)
    RatingRepository.save_mentor_rating(db, mentor, average or 0.0, total)
    logger.info(f"Mentor {mentor_id} rating recomputed: {mentor.average_rating:.2f} over {total}")
    return mentor
