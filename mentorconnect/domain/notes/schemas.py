"""Booking note schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoteCreate(BaseModel):
    content: str = Field(..., max_length=5000)
    note_type: Literal["note", "task"] = "note"

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        if not v.strip():
            raise ValueError("Note content cannot be empty")
        return v.strip()


class NoteUpdate(BaseModel):
    content: Optional[str] = Field(None, max_length=5000)
    is_completed: Optional[bool] = None


class NoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    booking_id: str
    author_email: str
    author_type: str
    note_type: str
    content: str
    is_completed: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
