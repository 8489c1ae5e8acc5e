"""Pydantic schemas for newsletter signup."""

from fastapi import HTTPException
from pydantic import BaseModel, EmailStr, Field, field_validator

from marketing_service.shared.storage.models import NewsletterCreate, NewsletterSubscription
from marketing_service.shared.validation.input_validation import validate_email


class NewsletterRequest(NewsletterCreate):
    """Schema for newsletter signup."""
    email: EmailStr = Field(..., description="Email address to subscribe")

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Trim and lower-case so the same inbox is only subscribed once."""
        try:
            return validate_email(v)
        except HTTPException as e:
            raise ValueError(e.detail)


class NewsletterResponse(BaseModel):
    """Schema for a newsletter subscription, new or already existing."""
    success: bool
    newsletter: NewsletterSubscription
