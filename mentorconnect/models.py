import enum
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a unique string primary key"""
    return str(uuid.uuid4())


class UserRole(str, enum.Enum):
    MENTOR = "mentor"
    MENTEE = "mentee"


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELED = "canceled"


class NotificationType(str, enum.Enum):
    BOOKING_REQUEST = "booking_request"
    BOOKING_ACCEPTED = "booking_accepted"
    BOOKING_REJECTED = "booking_rejected"
    BOOKING_CONFIRMED = "booking_confirmed"
    FEEDBACK_RECEIVED = "feedback_received"
    MENTOR_FEEDBACK = "mentor_feedback"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # mentor, mentee
    full_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (CheckConstraint("role IN ('mentor', 'mentee')", name="ck_users_role"),)


class Mentor(Base):
    __tablename__ = "mentors"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    company = Column(String(255), nullable=True)
    position = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    expertise = Column(JSON, default=list, nullable=False)
    industries = Column(JSON, default=list, nullable=False)
    languages_spoken = Column(JSON, default=list, nullable=False)
    timezone = Column(String(64), nullable=True)
    photo_url = Column(String(500), nullable=True)
    linkedin_url = Column(String(500), nullable=True)
    calendly_link = Column(String(500), nullable=True)  # Cal.com / Calendly scheduling link
    comms_owner = Column(String(20), default="exec", nullable=False)  # exec, assistant
    assistant_email = Column(String(255), nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    # Maintained by the rating aggregator, never written directly by the API
    average_rating = Column(Float, default=0.0, nullable=False)
    total_ratings = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    bookings = relationship("Booking", back_populates="mentor")
    tasks = relationship("MentorTask", back_populates="mentor", cascade="all, delete-orphan")
    availability = relationship(
        "MentorAvailability", back_populates="mentor", cascade="all, delete-orphan"
    )
    earnings = relationship("MentorEarning", back_populates="mentor", cascade="all, delete-orphan")
    activity = relationship(
        "MentorActivityLog", back_populates="mentor", cascade="all, delete-orphan"
    )


class Mentee(Base):
    __tablename__ = "mentees"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    user_type = Column(String(20), default="individual", nullable=False)  # individual, organization
    organization_name = Column(String(255), nullable=True)
    timezone = Column(String(64), nullable=True)
    languages_spoken = Column(JSON, default=list, nullable=False)
    areas_exploring = Column(JSON, default=list, nullable=False)
    photo_url = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    bookings = relationship("Booking", back_populates="mentee")
    favorites = relationship(
        "MenteeFavorite", back_populates="mentee", cascade="all, delete-orphan"
    )


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_id)
    mentor_id = Column(String(36), ForeignKey("mentors.id"), index=True, nullable=False)
    mentee_id = Column(String(36), ForeignKey("mentees.id"), index=True, nullable=False)
    status = Column(String(20), default=BookingStatus.PENDING.value, index=True, nullable=False)
    goal = Column(Text, nullable=True)
    cal_event_uri = Column(String(255), index=True, nullable=True)  # Cal.com booking uid
    # Lifecycle timestamps
    clicked_at = Column(DateTime, nullable=True)
    accepted_at = Column(DateTime, nullable=True)
    scheduled_at = Column(DateTime, nullable=True)  # Session start time reported by Cal.com
    confirmed_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    canceled_at = Column(DateTime, nullable=True)
    # Mentee rates the mentor
    mentee_rating = Column(Integer, nullable=True)
    mentee_feedback = Column(Text, nullable=True)
    mentee_rated_at = Column(DateTime, nullable=True)
    # Mentor rates the mentee
    mentor_rating = Column(Integer, nullable=True)
    mentor_feedback = Column(Text, nullable=True)
    mentor_rated_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    mentor = relationship("Mentor", back_populates="bookings")
    mentee = relationship("Mentee", back_populates="bookings")
    notes = relationship("BookingNote", back_populates="booking", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected', 'confirmed', 'completed', 'canceled')",
            name="ck_bookings_status",
        ),
        CheckConstraint(
            "mentee_rating IS NULL OR (mentee_rating BETWEEN 1 AND 5)",
            name="ck_bookings_mentee_rating",
        ),
        CheckConstraint(
            "mentor_rating IS NULL OR (mentor_rating BETWEEN 1 AND 5)",
            name="ck_bookings_mentor_rating",
        ),
    )


class BookingNote(Base):
    __tablename__ = "booking_notes"

    id = Column(String(36), primary_key=True, default=generate_id)
    booking_id = Column(String(36), ForeignKey("bookings.id"), index=True, nullable=False)
    author_email = Column(String(255), nullable=False)
    author_type = Column(String(20), nullable=False)  # mentor, mentee
    note_type = Column(String(20), default="note", nullable=False)  # note, task
    content = Column(Text, nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    booking = relationship("Booking", back_populates="notes")


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_id)
    recipient_email = Column(String(255), index=True, nullable=False)
    recipient_type = Column(String(20), nullable=False)  # mentor, mentee
    type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class MenteeFavorite(Base):
    __tablename__ = "mentee_favorites"

    id = Column(String(36), primary_key=True, default=generate_id)
    mentee_id = Column(String(36), ForeignKey("mentees.id"), index=True, nullable=False)
    mentor_id = Column(String(36), ForeignKey("mentors.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    mentee = relationship("Mentee", back_populates="favorites")
    mentor = relationship("Mentor")

    __table_args__ = (UniqueConstraint("mentee_id", "mentor_id", name="uq_mentee_favorite"),)


class MentorTask(Base):
    __tablename__ = "mentor_tasks"

    id = Column(String(36), primary_key=True, default=generate_id)
    mentor_id = Column(String(36), ForeignKey("mentors.id"), index=True, nullable=False)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String(20), default="medium", nullable=False)  # low, medium, high
    status = Column(String(20), default="pending", nullable=False)
    due_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    mentor = relationship("Mentor", back_populates="tasks")


class MentorAvailability(Base):
    __tablename__ = "mentor_availability"

    id = Column(String(36), primary_key=True, default=generate_id)
    mentor_id = Column(String(36), ForeignKey("mentors.id"), index=True, nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday ... 6 = Saturday
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    mentor = relationship("Mentor", back_populates="availability")


class MentorEarning(Base):
    __tablename__ = "mentor_earnings"

    id = Column(String(36), primary_key=True, default=generate_id)
    mentor_id = Column(String(36), ForeignKey("mentors.id"), index=True, nullable=False)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), default="USD", nullable=False)
    payout_status = Column(String(20), default="pending", nullable=False)  # pending, paid
    payout_month = Column(String(7), nullable=False)  # YYYY-MM
    earned_at = Column(DateTime, server_default=func.now())

    mentor = relationship("Mentor", back_populates="earnings")


class MentorActivityLog(Base):
    __tablename__ = "mentor_activity_log"

    id = Column(String(36), primary_key=True, default=generate_id)
    mentor_id = Column(String(36), ForeignKey("mentors.id"), index=True, nullable=False)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True)
    activity_type = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    mentor = relationship("Mentor", back_populates="activity")
