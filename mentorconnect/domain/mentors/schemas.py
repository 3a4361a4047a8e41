"""Mentor domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator, model_validator

from ...shared.validators import validate_email


class MentorCreate(BaseModel):
    """Schema for mentor onboarding"""

    name: str
    email: str
    company: Optional[str] = None
    position: Optional[str] = None
    bio: Optional[str] = None
    expertise: list[str] = []
    industries: list[str] = []
    languages_spoken: list[str] = []
    timezone: Optional[str] = None
    photo_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    calendly_link: Optional[str] = None
    comms_owner: Literal["exec", "assistant"] = "exec"
    assistant_email: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @model_validator(mode="after")
    def validate_assistant_email(self):
        if self.comms_owner == "assistant":
            if not self.assistant_email or not self.assistant_email.strip():
                raise ValueError(
                    "Assistant email is required when communication owner is 'Assistant'"
                )
            self.assistant_email = validate_email(self.assistant_email)
        return self


class MentorUpdate(BaseModel):
    """Schema for profile edits; email is immutable"""

    name: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
    bio: Optional[str] = None
    expertise: Optional[list[str]] = None
    industries: Optional[list[str]] = None
    languages_spoken: Optional[list[str]] = None
    timezone: Optional[str] = None
    photo_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    calendly_link: Optional[str] = None
    comms_owner: Optional[Literal["exec", "assistant"]] = None
    assistant_email: Optional[str] = None

    @field_validator("assistant_email")
    @classmethod
    def validate_assistant_email(cls, v):
        if v:
            return validate_email(v)
        return v


class MentorAvailabilityToggle(BaseModel):
    is_available: StrictBool


class MentorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    company: Optional[str] = None
    position: Optional[str] = None
    bio: Optional[str] = None
    expertise: list[str] = []
    industries: list[str] = []
    languages_spoken: list[str] = []
    timezone: Optional[str] = None
    photo_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    calendly_link: Optional[str] = None
    comms_owner: str
    assistant_email: Optional[str] = None
    is_available: bool
    average_rating: float
    total_ratings: int
    created_at: Optional[datetime] = None
