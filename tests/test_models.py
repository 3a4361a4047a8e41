import pytest
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from mentorconnect.models import Booking

from .conftest import request_booking


def test_booking_status_must_be_a_declared_value(client, mentor, db):
    _, profile = mentor
    booking = request_booking(client, profile["id"], mentee_email="max@example.com")

    with pytest.raises(IntegrityError):
        db.execute(update(Booking).where(Booking.id == booking["id"]).values(status="bogus"))
        db.commit()
    db.rollback()

    assert db.query(Booking).filter(Booking.id == booking["id"]).one().status == "pending"


def test_booking_rating_must_be_between_one_and_five(client, mentor, db):
    _, profile = mentor
    booking = request_booking(client, profile["id"], mentee_email="max@example.com")

    with pytest.raises(IntegrityError):
        db.execute(update(Booking).where(Booking.id == booking["id"]).values(mentee_rating=6))
        db.commit()
    db.rollback()
