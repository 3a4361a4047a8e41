"""Mentee router - FastAPI endpoints for mentee profiles and favorites"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ..bookings.schemas import BookingResponse
from .schemas import FavoriteCreate, FavoriteResponse, MenteeCreate, MenteeResponse, MenteeUpdate
from .service import MenteeService

router = APIRouter(prefix="/api/mentees", tags=["Mentees"])


def get_mentee_service(db: Session = Depends(get_db)) -> MenteeService:
    """Dependency injection for MenteeService"""
    return MenteeService(db)


@router.post("", response_model=MenteeResponse, status_code=201)
async def create_mentee(data: MenteeCreate, service: MenteeService = Depends(get_mentee_service)):
    """Mentee registration"""
    return service.create_mentee(data)


@router.get("/{email}", response_model=MenteeResponse)
async def get_mentee(
    email: str,
    current_user: User = Depends(get_current_user),
    service: MenteeService = Depends(get_mentee_service),
):
    return service.get_mentee_by_email(email)


@router.patch("/{mentee_id}", response_model=MenteeResponse)
async def update_mentee(
    mentee_id: str,
    data: MenteeUpdate,
    current_user: User = Depends(get_current_user),
    service: MenteeService = Depends(get_mentee_service),
):
    return service.update_mentee(mentee_id, data, current_user)


@router.get("/{email}/bookings", response_model=list[BookingResponse])
async def get_mentee_bookings(
    email: str,
    current_user: User = Depends(get_current_user),
    service: MenteeService = Depends(get_mentee_service),
):
    return service.get_mentee_bookings(email, current_user)


@router.get("/{email}/favorites", response_model=list[FavoriteResponse])
async def get_favorites(
    email: str,
    current_user: User = Depends(get_current_user),
    service: MenteeService = Depends(get_mentee_service),
):
    """Mentors the mentee has saved"""
    return service.get_favorites(email, current_user)


@router.post("/{email}/favorites", response_model=FavoriteResponse, status_code=201)
async def add_favorite(
    email: str,
    data: FavoriteCreate,
    current_user: User = Depends(get_current_user),
    service: MenteeService = Depends(get_mentee_service),
):
    return service.add_favorite(email, data.mentor_id, current_user)


@router.delete("/{email}/favorites/{mentor_id}", status_code=204)
async def remove_favorite(
    email: str,
    mentor_id: str,
    current_user: User = Depends(get_current_user),
    service: MenteeService = Depends(get_mentee_service),
):
    service.remove_favorite(email, mentor_id, current_user)
    return Response(status_code=204)
