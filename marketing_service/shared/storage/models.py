"""Record types held by the submission store."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that serializes with camelCase keys (firstName, createdAt, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactCreate(CamelModel):
    """Fields of a contact / demo request as handed to the store."""
    first_name: str
    last_name: str
    email: str
    school: str
    role: Optional[str] = None
    student_count: Optional[str] = None
    message: Optional[str] = None


class NewsletterCreate(CamelModel):
    """Fields of a newsletter signup as handed to the store."""
    email: str


class ContactSubmission(ContactCreate):
    """Stored contact request. Never updated after insertion."""
    model_config = ConfigDict(frozen=True)

    id: int
    created_at: datetime


class NewsletterSubscription(NewsletterCreate):
    """Stored newsletter subscription. One per distinct email."""
    model_config = ConfigDict(frozen=True)

    id: int
    created_at: datetime
