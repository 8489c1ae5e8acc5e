"""Pydantic schemas for the contact / demo request API."""

from typing import Optional

from fastapi import HTTPException
from pydantic import BaseModel, EmailStr, Field, field_validator

from marketing_service.shared.storage.models import ContactCreate, ContactSubmission
from marketing_service.shared.validation.input_validation import (
    MAX_CHOICE_LENGTH,
    MAX_MESSAGE_LENGTH,
    MAX_NAME_LENGTH,
    MAX_SCHOOL_LENGTH,
    validate_email,
    validate_optional_text,
    validate_required_text,
)


def _run_validator(func, *args):
    # Convert HTTPException to ValueError for Pydantic
    try:
        return func(*args)
    except HTTPException as e:
        raise ValueError(e.detail)


class ContactRequest(ContactCreate):
    """Schema for the contact / demo request form."""
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: EmailStr = Field(..., description="Work email address")
    school: str = Field(..., description="School or district name")
    role: Optional[str] = Field(None, description="teacher, principal, it_director, district_admin, parent or other")
    student_count: Optional[str] = Field(None, description="Student count range, e.g. '51-200'")
    message: Optional[str] = Field(None, description=f"Optional message (up to {MAX_MESSAGE_LENGTH} characters)")

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, v):
        return _run_validator(validate_required_text, v, "First name", MAX_NAME_LENGTH)

    @field_validator('last_name')
    @classmethod
    def validate_last_name(cls, v):
        return _run_validator(validate_required_text, v, "Last name", MAX_NAME_LENGTH)

    @field_validator('school')
    @classmethod
    def validate_school(cls, v):
        return _run_validator(validate_required_text, v, "School", MAX_SCHOOL_LENGTH)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return _run_validator(validate_email, v)

    @field_validator('role', 'student_count')
    @classmethod
    def validate_choice(cls, v, info):
        label = "Role" if info.field_name == 'role' else "Student count"
        return _run_validator(validate_optional_text, v, label, MAX_CHOICE_LENGTH)

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        return _run_validator(validate_optional_text, v, "Message", MAX_MESSAGE_LENGTH)


class ContactResponse(BaseModel):
    """Schema for a stored contact request."""
    success: bool
    contact: ContactSubmission
