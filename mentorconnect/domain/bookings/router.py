"""Booking router - FastAPI endpoints for the booking lifecycle"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_mentee, get_current_mentor, get_current_user, get_optional_user
from ...database import get_db
from ...models import Mentee, Mentor, User
from .schemas import (
    BookingRequestCreate,
    BookingResponse,
    BookingStatusUpdate,
    FeedbackCreate,
    MentorFeedbackCreate,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.post("/request", response_model=BookingResponse, status_code=201)
@router.post("", response_model=BookingResponse, status_code=201, include_in_schema=False)
async def create_booking_request(
    data: BookingRequestCreate,
    current_user: Optional[User] = Depends(get_optional_user),
    service: BookingService = Depends(get_booking_service),
):
    """Request a session with a mentor"""
    return service.create_request(data, current_user)


@router.get("", response_model=list[BookingResponse])
async def get_bookings(
    status: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Bookings the signed-in user takes part in"""
    return service.list_bookings(current_user, status)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_booking_for_user(booking_id, current_user)


@router.patch("/{booking_id}/accept", response_model=BookingResponse)
async def accept_booking(
    booking_id: str,
    mentor: Mentor = Depends(get_current_mentor),
    service: BookingService = Depends(get_booking_service),
):
    return await service.accept(booking_id, mentor)


@router.patch("/{booking_id}/decline", response_model=BookingResponse)
async def decline_booking(
    booking_id: str,
    mentor: Mentor = Depends(get_current_mentor),
    service: BookingService = Depends(get_booking_service),
):
    return service.decline(booking_id, mentor)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    data: BookingStatusUpdate,
    mentor: Mentor = Depends(get_current_mentor),
    service: BookingService = Depends(get_booking_service),
):
    """Mark a booking completed or canceled (accepted/rejected are routed to accept/decline)"""
    return await service.update_status(booking_id, data.status, mentor)


@router.post("/{booking_id}/feedback", response_model=BookingResponse)
async def submit_feedback(
    booking_id: str,
    data: FeedbackCreate,
    mentee: Mentee = Depends(get_current_mentee),
    service: BookingService = Depends(get_booking_service),
):
    """Mentee rates the session"""
    return service.submit_mentee_feedback(booking_id, data, mentee)


@router.post("/{booking_id}/mentor-feedback", response_model=BookingResponse)
async def submit_mentor_feedback(
    booking_id: str,
    data: MentorFeedbackCreate,
    mentor: Mentor = Depends(get_current_mentor),
    service: BookingService = Depends(get_booking_service),
):
    """Mentor rates the mentee"""
    return service.submit_mentor_feedback(booking_id, data, mentor)
