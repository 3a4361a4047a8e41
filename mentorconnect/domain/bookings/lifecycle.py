"""
Booking lifecycle rules

    pending -> accepted -> confirmed -> completed
    pending -> rejected
    pending | accepted | confirmed -> canceled

Older clients still send the previous vocabulary; those names are mapped onto
the canonical statuses before any rule is checked.
"""

from typing import Optional, Union

from ...models import BookingStatus

LEGACY_STATUS_ALIASES = {
    "clicked": BookingStatus.PENDING,
    "scheduled": BookingStatus.CONFIRMED,
    "cancelled": BookingStatus.CANCELED,
}

ALLOWED_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.ACCEPTED, BookingStatus.REJECTED, BookingStatus.CANCELED},
    BookingStatus.ACCEPTED: {
        BookingStatus.CONFIRMED,
        BookingStatus.COMPLETED,
        BookingStatus.CANCELED,
    },
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELED},
    BookingStatus.REJECTED: set(),
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELED: set(),
}

# Statuses a client may request through the generic status endpoints
UPDATABLE_STATUSES = (
    BookingStatus.ACCEPTED,
    BookingStatus.REJECTED,
    BookingStatus.COMPLETED,
    BookingStatus.CANCELED,
)


def normalize_status(value: Union[str, BookingStatus, None]) -> Optional[BookingStatus]:
    """Map a raw status string (canonical or legacy) to a BookingStatus, or None"""
    if value is None:
        return None
    if isinstance(value, BookingStatus):
        return value

    raw = str(value).strip().lower()
    if raw in LEGACY_STATUS_ALIASES:
        return LEGACY_STATUS_ALIASES[raw]
    try:
        return BookingStatus(raw)
    except ValueError:
        return None


def sources_for(target: BookingStatus) -> list[BookingStatus]:
    """Every status from which ``target`` can be reached"""
    return [source for source, targets in ALLOWED_TRANSITIONS.items() if target in targets]


def validate_status_transition(current_status: str, new_status: str) -> bool:
    """
    Check whether a booking may move from one status to another.

    Unknown statuses are never valid. Unlike contract statuses, a booking
    cannot transition to the status it already holds.
    """
    current = normalize_status(current_status)
    target = normalize_status(new_status)
    if current is None or target is None:
        return False
    return target in ALLOWED_TRANSITIONS[current]
