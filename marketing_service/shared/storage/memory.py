"""In-process submission store. Data is lost on restart."""

from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List

from marketing_service.shared.storage.base import SubmissionStore
from marketing_service.shared.storage.models import (
    ContactCreate,
    ContactSubmission,
    NewsletterCreate,
    NewsletterSubscription,
)


class MemorySubmissionStore(SubmissionStore):
    """
    Dict-backed store, safe to share between request threads.

    Each collection has its own lock. Every write and every snapshot read
    of a collection holds that lock, so subscribe_newsletter's
    lookup-then-insert is atomic and listings never see half a write.
    """

    def __init__(self):
        self._contacts: Dict[int, ContactSubmission] = {}
        self._contacts_lock = Lock()
        self._next_contact_id = 1

        self._newsletters: Dict[int, NewsletterSubscription] = {}
        self._newsletters_by_email: Dict[str, NewsletterSubscription] = {}
        self._newsletters_lock = Lock()
        self._next_newsletter_id = 1

    def create_contact(self, data: ContactCreate) -> ContactSubmission:
        with self._contacts_lock:
            contact = ContactSubmission(
                **data.model_dump(),
                id=self._next_contact_id,
                created_at=datetime.now(timezone.utc),
            )
            self._contacts[contact.id] = contact
            self._next_contact_id += 1
        return contact

    def list_contacts(self) -> List[ContactSubmission]:
        with self._contacts_lock:
            return list(self._contacts.values())

    def subscribe_newsletter(self, data: NewsletterCreate) -> NewsletterSubscription:
        with self._newsletters_lock:
            existing = self._newsletters_by_email.get(data.email)
            if existing is not None:
                return existing

            subscription = NewsletterSubscription(
                **data.model_dump(),
                id=self._next_newsletter_id,
                created_at=datetime.now(timezone.utc),
            )
            self._newsletters[subscription.id] = subscription
            self._newsletters_by_email[subscription.email] = subscription
            self._next_newsletter_id += 1
        return subscription

    def list_newsletter_subscriptions(self) -> List[NewsletterSubscription]:
        with self._newsletters_lock:
            return list(self._newsletters.values())
