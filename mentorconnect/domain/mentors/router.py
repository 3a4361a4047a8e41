"""Mentor router - FastAPI endpoints for mentor discovery and profiles"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ..bookings.schemas import BookingResponse
from .schemas import MentorAvailabilityToggle, MentorCreate, MentorResponse, MentorUpdate
from .service import MentorService

router = APIRouter(prefix="/api/mentors", tags=["Mentors"])


def get_mentor_service(db: Session = Depends(get_db)) -> MentorService:
    """Dependency injection for MentorService"""
    return MentorService(db)


@router.get("", response_model=list[MentorResponse])
async def get_mentors(
    search: Optional[str] = Query(None),
    expertise: Optional[str] = Query(None),
    industry: Optional[str] = Query(None),
    language: Optional[str] = Query(None),
    available: Optional[bool] = Query(None),
    service: MentorService = Depends(get_mentor_service),
):
    """Browse mentors with optional search and filters"""
    return service.list_mentors(search, expertise, industry, language, available)


@router.post("", response_model=MentorResponse, status_code=201)
async def create_mentor(
    data: MentorCreate,
    service: MentorService = Depends(get_mentor_service),
):
    """Mentor onboarding"""
    return service.create_mentor(data)


@router.get("/email/{email}", response_model=MentorResponse)
async def get_mentor_by_email(email: str, service: MentorService = Depends(get_mentor_service)):
    return service.get_mentor_by_email(email)


@router.get("/{mentor_id}", response_model=MentorResponse)
async def get_mentor(mentor_id: str, service: MentorService = Depends(get_mentor_service)):
    return service.get_mentor(mentor_id)


@router.get("/{mentor_id}/bookings", response_model=list[BookingResponse])
async def get_mentor_bookings(
    mentor_id: str,
    current_user: User = Depends(get_current_user),
    service: MentorService = Depends(get_mentor_service),
):
    """Bookings of a mentor, visible to the mentor only"""
    return service.get_mentor_bookings(mentor_id, current_user)


@router.patch("/{mentor_id}", response_model=MentorResponse)
async def update_mentor(
    mentor_id: str,
    data: MentorUpdate,
    current_user: User = Depends(get_current_user),
    service: MentorService = Depends(get_mentor_service),
):
    return service.update_mentor(mentor_id, data, current_user)


@router.patch("/{mentor_id}/availability", response_model=MentorResponse)
async def set_mentor_availability(
    mentor_id: str,
    data: MentorAvailabilityToggle,
    current_user: User = Depends(get_current_user),
    service: MentorService = Depends(get_mentor_service),
):
    """Toggle whether the mentor accepts new requests"""
    return service.set_availability(mentor_id, data.is_available, current_user)
