"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import validate_email, validate_rating
from .lifecycle import UPDATABLE_STATUSES, normalize_status


class BookingRequestCreate(BaseModel):
    """A mentee asking a mentor for a session"""

    mentor_id: str
    mentee_id: Optional[str] = None
    mentee_email: Optional[str] = None
    mentee_name: Optional[str] = None
    goal: Optional[str] = Field(None, max_length=2000)

    @field_validator("mentee_email")
    @classmethod
    def validate_mentee_email(cls, v):
        if v:
            return validate_email(v)
        return v


class BookingStatusUpdate(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        status = normalize_status(v)
        if status not in UPDATABLE_STATUSES:
            allowed = ", ".join(s.value for s in UPDATABLE_STATUSES)
            raise ValueError(f"Invalid status. Must be one of: {allowed}")
        return status.value


class FeedbackCreate(BaseModel):
    rating: int
    feedback: Optional[str] = Field(None, max_length=5000)

    @field_validator("rating")
    @classmethod
    def validate_rating_field(cls, v):
        return validate_rating(v)


class MentorFeedbackCreate(FeedbackCreate):
    # Older mentor portals send the mentor's address along with the rating
    mentor_email: Optional[str] = None


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    mentor_id: str
    mentee_id: str
    status: str
    goal: Optional[str] = None
    cal_event_uri: Optional[str] = None
    clicked_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    canceled_at: Optional[datetime] = None
    mentee_rating: Optional[int] = None
    mentee_feedback: Optional[str] = None
    mentee_rated_at: Optional[datetime] = None
    mentor_rating: Optional[int] = None
    mentor_feedback: Optional[str] = None
    mentor_rated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
