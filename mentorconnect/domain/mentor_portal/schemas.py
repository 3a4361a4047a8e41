"""Mentor portal schemas - Pydantic models for validation"""

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...shared.validators import validate_time_of_day

TaskPriority = Literal["low", "medium", "high"]
TaskStatus = Literal["pending", "in_progress", "completed", "canceled"]


class DashboardStats(BaseModel):
    totalSessions: int
    completedSessions: int
    pendingBookings: int
    averageRating: float
    feedbackCount: int
    totalEarnings: float
    monthlyEarnings: float


class FeedbackItem(BaseModel):
    bookingId: str
    menteeName: Optional[str] = None
    rating: int
    feedback: Optional[str] = None
    ratedAt: Optional[datetime] = None


# Tasks


class TaskCreate(BaseModel):
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    priority: TaskPriority = "medium"
    status: TaskStatus = "pending"
    due_date: Optional[datetime] = None
    booking_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError("Title is required")
        return v.strip()


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    mentor_id: str
    booking_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    priority: str
    status: str
    due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Availability


class AvailabilitySlot(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: str
    end_time: str
    is_active: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_of_day(v)

    @model_validator(mode="after")
    def validate_range(self):
        # HH:MM strings order the same way as the times they represent
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class AvailabilityReplace(BaseModel):
    slots: list[AvailabilitySlot]


class AvailabilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    mentor_id: str
    day_of_week: int
    start_time: str
    end_time: str
    is_active: bool


# Earnings


class EarningCreate(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    currency: str = Field("USD", min_length=3, max_length=3)
    booking_id: Optional[str] = None
    payout_month: Optional[str] = Field(None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$")

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v):
        return v.upper()


class EarningPayoutUpdate(BaseModel):
    payout_status: Literal["pending", "paid"]


class EarningResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    mentor_id: str
    booking_id: Optional[str] = None
    amount: float
    currency: str
    payout_status: str
    payout_month: str
    earned_at: Optional[datetime] = None


class ActivityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    mentor_id: str
    booking_id: Optional[str] = None
    activity_type: str
    description: str
    created_at: Optional[datetime] = None
