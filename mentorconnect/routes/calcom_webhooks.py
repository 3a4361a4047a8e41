"""
Cal.com Webhook Routes
Turns scheduled and cancelled Cal.com bookings into booking lifecycle transitions
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from ..config import CALCOM_WEBHOOK_SECRET
from ..database import get_db
from ..domain.bookings.lifecycle import normalize_status
from ..domain.bookings.service import BookingService
from ..models import BookingStatus
from ..rate_limiter import create_rate_limiter
from ..webhook_security import verify_calcom_webhook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["calcom-webhooks"])

# Rate limiter for webhooks - 100 requests per minute
rate_limit_webhook = create_rate_limiter(
    limit=100,
    window_seconds=60,
    key_prefix="webhook_calcom",
    use_ip=False,  # Global limit for all webhooks
)


class CalcomAttendee(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


class CalcomBookingPayload(BaseModel):
    uid: Optional[str] = None
    startTime: Optional[str] = None
    attendees: Optional[list[CalcomAttendee]] = None
    metadata: Optional[dict[str, Any]] = None
    responses: Optional[dict[str, Any]] = None


class CalcomEvent(BaseModel):
    triggerEvent: Optional[str] = None
    payload: Optional[CalcomBookingPayload] = None


class DirectConfirmation(BaseModel):
    """Internal payload sent by the frontend once the calendar embed reports a booking"""

    mentor_id: str
    mentee_id: Optional[str] = None
    status: Optional[str] = None
    scheduled_at: Optional[str] = None
    cal_event_uri: Optional[str] = None


def parse_webhook_body(payload: dict) -> Union[CalcomEvent, DirectConfirmation]:
    """Pick the payload shape and validate it; schema mismatches surface as 400"""
    try:
        if payload.get("triggerEvent") is None and payload.get("mentor_id"):
            return DirectConfirmation.model_validate(payload)
        return CalcomEvent.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"⚠️ Rejected malformed Cal.com webhook: {e.error_count()} error(s)")
        raise RequestValidationError(e.errors(include_url=False))


def parse_event_time(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into naive UTC"""
    if not value:
        return None
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"Invalid timestamp '{value}'")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid timestamp '{value}'")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def extract_mentor_id(booking_data: CalcomBookingPayload) -> Optional[str]:
    """Mentor id travels in metadata, or as a booking question on older event types"""
    metadata = booking_data.metadata or {}
    if metadata.get("mentorId"):
        return str(metadata["mentorId"])

    responses = booking_data.responses or {}
    mentor_field = responses.get("mentor_id")
    if isinstance(mentor_field, dict):
        mentor_field = mentor_field.get("value")
    if mentor_field is None or isinstance(mentor_field, (dict, list)):
        return None
    return str(mentor_field)


@router.post("/calcom")
async def handle_calcom_webhook(
    request: Request, db: Session = Depends(get_db), _: None = Depends(rate_limit_webhook)
):
    """
    Handle Cal.com webhook events - Rate limited to 100 requests per minute
    Supported events: BOOKING_CREATED, BOOKING_CANCELLED, plus the internal
    {mentor_id, mentee_id} confirmation payload

    Security:
    - Signature verification using HMAC-SHA256 when CALCOM_WEBHOOK_SECRET is set
    - Rate limiting to prevent abuse
    """
    if not CALCOM_WEBHOOK_SECRET:
        logger.warning("⚠️ CALCOM_WEBHOOK_SECRET not configured - signature verification skipped")
        body = await request.body()
    else:
        _, body = await verify_calcom_webhook(request, CALCOM_WEBHOOK_SECRET, raise_on_failure=True)

    try:
        payload = json.loads(body.decode() or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise HTTPException(status_code=400, detail="Invalid JSON payload")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid JSON payload")

    event = parse_webhook_body(payload)
    service = BookingService(db)

    try:
        if isinstance(event, DirectConfirmation):
            return handle_direct_confirmation(event, service)

        logger.debug(f"📥 Received Cal.com webhook: {event.triggerEvent}")
        booking_data = event.payload or CalcomBookingPayload()

        if event.triggerEvent == "BOOKING_CREATED":
            return handle_booking_created(booking_data, service)
        if event.triggerEvent == "BOOKING_CANCELLED":
            return handle_booking_cancelled(booking_data, service)

        logger.debug(f"Unhandled Cal.com event type: {event.triggerEvent}")
        return {"status": "ignored"}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Webhook processing error: {str(e)}")
        logger.exception("Full webhook error traceback:")
        raise HTTPException(status_code=500, detail="Webhook processing failed") from e


def handle_booking_created(booking_data: CalcomBookingPayload, service: BookingService) -> dict:
    mentor_id = extract_mentor_id(booking_data)
    if not mentor_id:
        raise HTTPException(status_code=400, detail="Missing mentor id in booking metadata")

    attendee = booking_data.attendees[0] if booking_data.attendees else None
    if attendee is None or not attendee.email:
        raise HTTPException(status_code=400, detail="Missing attendee email")

    booking, created = service.confirm_from_calendar(
        mentor_id=mentor_id,
        mentee_email=attendee.email,
        mentee_name=attendee.name,
        scheduled_at=parse_event_time(booking_data.startTime),
        cal_event_uri=booking_data.uid,
    )
    return {"status": "ok", "booking_id": booking.id, "created": created}


def handle_booking_cancelled(booking_data: CalcomBookingPayload, service: BookingService) -> dict:
    if not booking_data.uid:
        raise HTTPException(status_code=400, detail="Missing booking uid")

    booking = service.cancel_from_calendar(booking_data.uid)
    if booking is None:
        return {"status": "ignored"}
    return {"status": "ok", "booking_id": booking.id}


def handle_direct_confirmation(data: DirectConfirmation, service: BookingService) -> dict:
    if not data.mentee_id:
        raise HTTPException(status_code=400, detail="mentee_id is required")

    if data.status is not None and normalize_status(data.status) != BookingStatus.CONFIRMED:
        raise HTTPException(status_code=400, detail=f"Unsupported booking status '{data.status}'")

    booking, created = service.confirm_from_calendar(
        mentor_id=data.mentor_id,
        mentee_id=data.mentee_id,
        scheduled_at=parse_event_time(data.scheduled_at),
        cal_event_uri=data.cal_event_uri,
    )
    return {"status": "ok", "booking_id": booking.id, "created": created}
