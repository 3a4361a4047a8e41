"""Mentee domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ...shared.validators import validate_email
from ..mentors.schemas import MentorResponse


class MenteeCreate(BaseModel):
    name: str
    email: str
    user_type: Literal["individual", "organization"] = "individual"
    organization_name: Optional[str] = None
    timezone: Optional[str] = "UTC"
    languages_spoken: list[str] = ["English"]
    areas_exploring: list[str] = []
    photo_url: Optional[str] = None
    bio: Optional[str] = None

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
    def validate_organization(self):
        if self.user_type == "organization" and not (self.organization_name or "").strip():
            raise ValueError("Organization name is required for organization accounts")
        return self


class MenteeUpdate(BaseModel):
    name: Optional[str] = None
    user_type: Optional[Literal["individual", "organization"]] = None
    organization_name: Optional[str] = None
    timezone: Optional[str] = None
    languages_spoken: Optional[list[str]] = None
    areas_exploring: Optional[list[str]] = None
    photo_url: Optional[str] = None
    bio: Optional[str] = None


class MenteeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    user_type: str
    organization_name: Optional[str] = None
    timezone: Optional[str] = None
    languages_spoken: list[str] = []
    areas_exploring: list[str] = []
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None


class FavoriteCreate(BaseModel):
    mentor_id: str


class FavoriteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    mentor_id: str
    created_at: Optional[datetime] = None
    mentor: MentorResponse
