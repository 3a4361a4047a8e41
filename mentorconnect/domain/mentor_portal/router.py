"""Mentor portal router - endpoints behind the mentor dashboard"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_mentor
from ...database import get_db
from ...models import Mentor
from ..bookings.router import get_booking_service
from ..bookings.schemas import BookingResponse, BookingStatusUpdate
from ..bookings.service import BookingService
from .schemas import (
    ActivityResponse,
    AvailabilityReplace,
    AvailabilityResponse,
    DashboardStats,
    EarningCreate,
    EarningPayoutUpdate,
    EarningResponse,
    FeedbackItem,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from .service import MentorPortalService

router = APIRouter(prefix="/api/mentor/{mentor_id}", tags=["Mentor Portal"])


def get_portal_mentor(mentor_id: str, mentor: Mentor = Depends(get_current_mentor)) -> Mentor:
    """The signed-in mentor, who must own the portal being accessed"""
    if mentor.id != mentor_id:
        raise HTTPException(status_code=403, detail="You can only access your own portal")
    return mentor


def get_portal_service(
    mentor: Mentor = Depends(get_portal_mentor), db: Session = Depends(get_db)
) -> MentorPortalService:
    """Dependency injection for MentorPortalService"""
    return MentorPortalService(db, mentor)


# ============================================================================
# BOOKINGS & FEEDBACK
# ============================================================================


@router.get("/bookings", response_model=list[BookingResponse])
async def get_bookings(
    status: Optional[str] = Query(None),
    service: MentorPortalService = Depends(get_portal_service),
):
    return service.get_bookings(status)


@router.patch("/bookings/{booking_id}", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    data: BookingStatusUpdate,
    mentor: Mentor = Depends(get_portal_mentor),
    booking_service: BookingService = Depends(get_booking_service),
):
    return await booking_service.update_status(booking_id, data.status, mentor)


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(service: MentorPortalService = Depends(get_portal_service)):
    return service.get_dashboard()


@router.get("/feedback", response_model=list[FeedbackItem])
async def get_feedback(service: MentorPortalService = Depends(get_portal_service)):
    """Ratings mentees have left for this mentor"""
    return service.get_feedback()


# ============================================================================
# TASKS
# ============================================================================


@router.get("/tasks", response_model=list[TaskResponse])
async def get_tasks(
    status: Optional[str] = Query(None),
    service: MentorPortalService = Depends(get_portal_service),
):
    return service.get_tasks(status)


@router.post("/tasks", response_model=TaskResponse, status_code=201)
async def create_task(data: TaskCreate, service: MentorPortalService = Depends(get_portal_service)):
    return service.create_task(data)


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    data: TaskUpdate,
    service: MentorPortalService = Depends(get_portal_service),
):
    return service.update_task(task_id, data)


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(task_id: str, service: MentorPortalService = Depends(get_portal_service)):
    service.delete_task(task_id)
    return Response(status_code=204)


# ============================================================================
# AVAILABILITY
# ============================================================================


@router.get("/availability", response_model=list[AvailabilityResponse])
async def get_availability(service: MentorPortalService = Depends(get_portal_service)):
    return service.get_availability()


@router.put("/availability", response_model=list[AvailabilityResponse])
async def replace_availability(
    data: AvailabilityReplace,
    service: MentorPortalService = Depends(get_portal_service),
):
    """Replace the mentor's weekly schedule"""
    return service.replace_availability(data.slots)


# ============================================================================
# EARNINGS & ACTIVITY
# ============================================================================


@router.get("/earnings", response_model=list[EarningResponse])
async def get_earnings(service: MentorPortalService = Depends(get_portal_service)):
    return service.get_earnings()


@router.post("/earnings", response_model=EarningResponse, status_code=201)
async def create_earning(
    data: EarningCreate, service: MentorPortalService = Depends(get_portal_service)
):
    return service.create_earning(data)


@router.patch("/earnings/{earning_id}", response_model=EarningResponse)
async def update_payout_status(
    earning_id: str,
    data: EarningPayoutUpdate,
    service: MentorPortalService = Depends(get_portal_service),
):
    return service.set_payout_status(earning_id, data.payout_status)


@router.get("/activity", response_model=list[ActivityResponse])
async def get_activity(
    limit: int = Query(20, ge=1, le=100),
    service: MentorPortalService = Depends(get_portal_service),
):
    return service.get_activity(limit)
