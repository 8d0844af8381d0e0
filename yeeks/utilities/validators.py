"""
Input validation schemas using Pydantic for the notes API.
"""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from yeeks.utilities.constants import NOTE_MAX_LENGTH


class NoteInput(BaseModel):
    """Schema for saving a week note. Empty content is allowed and stored as such."""
    content: str = Field(..., max_length=NOTE_MAX_LENGTH)

    @field_validator('content')
    @classmethod
    def normalize_newlines(cls, v):
        """Store newlines as '\\n' regardless of the client platform."""
        return v.replace('\r\n', '\n')


class NoteOutput(BaseModel):
    year: int
    week: int
    content: str
    lastModified: datetime
    has_content: bool
