"""Shared validation utilities"""

import re
from typing import Optional

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    if not re.match(EMAIL_PATTERN, email):
        raise ValueError("Invalid email format")

    return email


def validate_time_of_day(value: str) -> str:
    """Validate a 24h HH:MM time string"""
    value = (value or "").strip()
    if not re.match(TIME_PATTERN, value):
        raise ValueError("Time must be in HH:MM format")
    return value


def validate_rating(value: int) -> int:
    """Ratings are whole stars from 1 to 5"""
    if value < 1 or value > 5:
        raise ValueError("Rating must be between 1 and 5")
    return value
