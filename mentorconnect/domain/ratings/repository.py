"""Rating repository - aggregate queries over booking feedback"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Booking, Mentor


class RatingRepository:
    @staticmethod
    def get_mentee_rating_stats(db: Session, mentor_id: str) -> tuple[Optional[float], int]:
        """Mean and count of every non-null mentee rating across the mentor's bookings"""
        average, count = (
            db.query(func.avg(Booking.mentee_rating), func.count(Booking.mentee_rating))
            .filter(Booking.mentor_id == mentor_id, Booking.mentee_rating.isnot(None))
            .one()
        )
        return (float(average) if average is not None else None), int(count or 0)

    @staticmethod
    def save_mentor_rating(db: Session, mentor: Mentor, average: float, total: int) -> Mentor:
        mentor.average_rating = average
        mentor.total_ratings = total
        db.flush()
        return mentor
