from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class SubmissionForm(BaseModel):
    """Text fields of a form post. None of them is required or validated."""

    name: Optional[str] = None
    number: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class StoredFile(BaseModel):
    original_name: str
    stored_path: str
    mime_type: str
    size_bytes: int = Field(..., ge=0)


class SubmissionResponse(BaseModel):
    message: str

    class Config:
        json_schema_extra = {
            "example": {"message": "Form submitted and email sent successfully!"}
        }


class SubmissionErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {"message": "Server error", "error": "SMTP AUTH failed"}
        }
